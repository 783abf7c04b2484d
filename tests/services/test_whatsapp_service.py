"""WhatsApp service tests."""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from wa_gateway.errors import ClientOperationError, NotAGroupError
from wa_gateway.models.config import APIConfig
from wa_gateway.services.whatsapp import WhatsAppService

from conftest import FakeClient, make_chat


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def service(client):
    return WhatsAppService(client, APIConfig(messages_default_limit=25))


@pytest.mark.asyncio
async def test_library_errors_become_client_operation_errors(service, client):
    client.calls.set_status.side_effect = RuntimeError("Evaluation failed: status too long")

    with pytest.raises(ClientOperationError) as excinfo:
        await service.set_status("x" * 200)

    assert excinfo.value.message == "Evaluation failed: status too long"
    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_errors_without_message_report_exception_type(service, client):
    client.calls.sync_history.side_effect = TimeoutError()

    with pytest.raises(ClientOperationError, match="TimeoutError"):
        await service.sync_history("123@c.us")


@pytest.mark.asyncio
async def test_group_guard_is_not_wrapped(service, client):
    client.add_chat(make_chat("123@c.us"))

    with pytest.raises(NotAGroupError):
        await service.leave_group("123@c.us")


@pytest.mark.asyncio
async def test_add_labels_keeps_existing_labels_without_duplicates(service, client):
    chat = client.add_chat(make_chat("123@c.us"))
    chat.get_labels.return_value = [SimpleNamespace(id="1"), SimpleNamespace(id="2")]

    await service.add_labels("123@c.us", ["2", "5"])

    chat.change_labels.assert_awaited_once_with(["1", "2", "5"])


@pytest.mark.asyncio
async def test_mute_chat_mutes_until_now_plus_duration(service, client):
    chat = client.add_chat(make_chat("123@c.us"))
    before = datetime.now()

    await service.mute_chat("123@c.us", 60)

    unmute_date = chat.mute.await_args.args[0]
    assert before + timedelta(seconds=60) <= unmute_date <= datetime.now() + timedelta(seconds=60)


@pytest.mark.asyncio
async def test_fetch_messages_uses_configured_default_limit(service, client):
    chat = client.add_chat(make_chat("123@c.us"))

    await service.fetch_messages("123@c.us")

    chat.fetch_messages.assert_awaited_once_with(limit=25)


@pytest.mark.asyncio
async def test_membership_options_only_include_given_values(service, client):
    client.calls.approve_group_membership_requests.return_value = []

    await service.approve_membership_requests("120363@g.us")
    await service.approve_membership_requests("120363@g.us", requester_ids=["111@c.us"], sleep=[250, 500])

    first, second = client.calls.approve_group_membership_requests.await_args_list
    assert first.kwargs == {}
    assert second.kwargs == {"requester_ids": ["111@c.us"], "sleep": [250, 500]}


@pytest.mark.asyncio
async def test_statuses_are_converted_to_plain_data(service, client):
    client.calls.get_broadcasts.return_value = [
        SimpleNamespace(id="status@broadcast", total_count=3, unread_count=1)
    ]

    statuses = await service.get_statuses()

    assert statuses == [{"id": "status@broadcast", "total_count": 3, "unread_count": 1}]


@pytest.mark.asyncio
async def test_membership_options_keep_explicit_empty_requester_list(service, client):
    client.calls.reject_group_membership_requests.return_value = []

    await service.reject_membership_requests("120363@g.us", requester_ids=[])

    client.calls.reject_group_membership_requests.assert_awaited_once_with(
        "120363@g.us", requester_ids=[]
    )
