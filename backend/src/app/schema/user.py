from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    username: str
    password: str


class User(BaseModel):
    id: str
    username: str
    password: str

    model_config = ConfigDict(from_attributes=True)
