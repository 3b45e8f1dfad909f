import httpx
import pytest
import pytest_asyncio

from client.api import ApiRequestError, ChirpinApiClient
from client.forms import (
    ContactForm,
    EmailFieldState,
    FormState,
    SubmissionForm,
    WaitlistForm,
    email_field_state,
)
from infrastructure.application import create_app


@pytest_asyncio.fixture
async def chirpin_api(app_config, storage):
    app = create_app(app_config, storage=storage)
    api = ChirpinApiClient("http://testserver", transport=httpx.ASGITransport(app=app))
    yield api
    await api.close()


@pytest.mark.parametrize(
    "email, expected",
    [
        ("", EmailFieldState.idle),
        ("   ", EmailFieldState.idle),
        ("jane@", EmailFieldState.invalid),
        (" jane@example.com ", EmailFieldState.valid),
    ],
)
def test_email_field_state(email, expected):
    assert email_field_state(email) == expected


def test_submission_form_needs_a_concrete_form():
    with pytest.raises(TypeError):
        SubmissionForm(None)


@pytest.mark.asyncio
async def test_waitlist_form_gates_submit(chirpin_api):
    form = WaitlistForm(chirpin_api)
    assert not form.can_submit

    form.full_name = "Jane Doe"
    form.email = "jane@"
    assert not form.can_submit
    assert await form.submit() is False
    assert form.state == FormState.idle

    form.email = "jane@example.com"
    assert form.can_submit


@pytest.mark.asyncio
async def test_waitlist_form_submits_then_returns_to_idle(chirpin_api, storage):
    form = WaitlistForm(chirpin_api, confirmation_seconds=0)
    form.full_name = "Jane Doe"
    form.email = "Jane@Example.com"

    assert await form.submit() is True
    assert form.state == FormState.submitted
    assert form.full_name == form.email == ""
    assert form.persona == "parent"
    assert form.response["registration"]["email"] == "jane@example.com"

    await form.wait_until_idle()
    assert form.state == FormState.idle
    assert await chirpin_api.get_waitlist_count() == 1


@pytest.mark.asyncio
async def test_waitlist_form_keeps_input_on_error(chirpin_api):
    first = WaitlistForm(chirpin_api, confirmation_seconds=0)
    first.full_name, first.email = "Jane Doe", "jane@example.com"
    await first.submit()

    form = WaitlistForm(chirpin_api)
    form.full_name, form.email = "Jane Again", "jane@example.com"

    assert await form.submit() is False
    assert form.state == FormState.error
    assert form.error == "This email is already registered for the waitlist."
    assert (form.full_name, form.email) == ("Jane Again", "jane@example.com")
    assert form.can_submit
    await first.wait_until_idle()


@pytest.mark.asyncio
async def test_contact_form_flow(chirpin_api):
    form = ContactForm(chirpin_api, confirmation_seconds=0)
    form.name, form.email, form.subject = "Sam", "sam@example.com", "Pilot"
    form.message = "too short"
    assert not form.can_submit

    form.message = "Can we run a pilot next term?"
    assert await form.submit() is True
    assert form.response["submission"]["subject"] == "Pilot"
    assert (form.name, form.message) == ("", "")

    await form.wait_until_idle()
    assert form.state == FormState.idle


@pytest.mark.asyncio
@pytest.mark.parametrize("storage", ["airtable"], indirect=True)
async def test_contact_form_reports_server_failure(chirpin_api, fake_airtable):
    form = ContactForm(chirpin_api)
    form.name, form.email, form.subject = "Sam", "sam@example.com", "Pilot"
    form.message = "Can we run a pilot next term?"
    fake_airtable.fail = True

    assert await form.submit() is False
    assert form.state == FormState.error
    assert form.error == "Failed to send message. Please try again."
    assert form.message == "Can we run a pilot next term?"


@pytest.mark.asyncio
async def test_api_client_carries_validation_errors(chirpin_api):
    with pytest.raises(ApiRequestError) as exc_info:
        await chirpin_api.join_waitlist("", "jane@example.com", "parent")

    assert exc_info.value.status_code == 400
    assert exc_info.value.errors == [{"field": "fullName", "message": "Full name is required"}]


@pytest.mark.asyncio
async def test_api_client_unreachable_server():
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = ChirpinApiClient("http://testserver", transport=httpx.MockTransport(unreachable))

    with pytest.raises(ApiRequestError) as exc_info:
        await api.get_waitlist_count()

    assert exc_info.value.message == "Failed to get waitlist count"
    assert exc_info.value.status_code is None
    await api.close()
