# type: ignore
"""
Tests for recipient resolution, the SMS client and the notification dispatcher.

Run:  pytest test_notifications.py -v
"""
import asyncio

import httpx
import pytest

from conftest import APP_URL, FROM_NUMBER, FakeSmsClient, make_staff
from ritepath.models.domain import DocumentSignedNotification, NewCaseNotification
from ritepath.repositories.profile_repository import ProfileRepository
from ritepath.repositories.staff_repository import StaffRepository
from ritepath.services.notification_service import NotificationDispatcher
from ritepath.services.recipients import RecipientResolver, is_notifiable
from ritepath.services.sms_client import SmsSendError, TwilioSmsClient

NEW_CASE = NewCaseNotification(
    deceased_name="Eleanor Vance",
    next_of_kin_name="Margaret Vance",
    location_of_death="St. Mary's Hospital",
    case_id="case-123",
)
SIGNED = DocumentSignedNotification(
    signer_name="Margaret Vance",
    document_type="Cremation Authorization",
    deceased_name="Eleanor Vance",
    case_id="case-123",
)


def _dispatcher(sms, timeout=2.0):
    return NotificationDispatcher(sms, from_number=FROM_NUMBER, app_url=APP_URL, send_timeout=timeout)


def _directory(*members):
    repo = StaffRepository(seed_defaults=False)
    for m in members:
        repo.add_staff(m)
    return repo


def _profile(sms_enabled=True, phone=""):
    repo = ProfileRepository()
    repo.update_notification_preferences({"sms_enabled": sms_enabled, "phone_number": phone})
    return repo


# ══════════════════════════════════════════════════════════════════════════
# RECIPIENTS
# ══════════════════════════════════════════════════════════════════════════
class TestEligibility:
    @pytest.mark.parametrize("role", ["funeral-director", "removal-team"])
    @pytest.mark.parametrize("availability", ["available", "on-call"])
    def test_eligible(self, role, availability):
        assert is_notifiable(make_staff("s", "+1555", role=role, availability=availability))

    @pytest.mark.parametrize("role", ["funeral-director", "removal-team", "embalmer", "administrative", "other"])
    def test_unavailable_never_eligible(self, role):
        assert not is_notifiable(make_staff("s", "+1555", role=role, availability="unavailable"))

    @pytest.mark.parametrize("role", ["funeral-director", "removal-team", "embalmer", "administrative", "other"])
    def test_empty_phone_never_eligible(self, role):
        assert not is_notifiable(make_staff("s", "", role=role))

    @pytest.mark.parametrize("role", ["embalmer", "administrative", "other"])
    def test_other_roles_not_eligible(self, role):
        assert not is_notifiable(make_staff("s", "+1555", role=role))


class TestRecipientResolver:
    def test_dedupes_staff_and_profile_phone(self):
        directory = _directory(make_staff("1", "A"), make_staff("2", "B"), make_staff("3", "A"))
        resolver = RecipientResolver(directory, _profile(sms_enabled=True, phone="B"))
        phones = resolver.get_notifiable_staff()
        assert phones == ["A", "B"]
        assert set(phones) == {"A", "B"}

    def test_profile_phone_added_when_opted_in(self):
        resolver = RecipientResolver(_directory(make_staff("1", "A")), _profile(phone="C"))
        assert resolver.get_notifiable_staff() == ["A", "C"]

    def test_profile_phone_skipped_when_sms_disabled(self):
        resolver = RecipientResolver(_directory(make_staff("1", "A")), _profile(sms_enabled=False, phone="C"))
        assert resolver.get_notifiable_staff() == ["A"]

    def test_profile_without_phone_adds_nothing(self):
        resolver = RecipientResolver(_directory(make_staff("1", "A")), _profile(phone=""))
        assert resolver.get_notifiable_staff() == ["A"]

    def test_filters_ineligible_staff(self):
        directory = _directory(
            make_staff("1", "A", role="funeral-director"),
            make_staff("2", "B", availability="unavailable"),
            make_staff("3", "", role="removal-team"),
            make_staff("4", "D", role="embalmer"),
        )
        resolver = RecipientResolver(directory, _profile())
        assert resolver.get_notifiable_staff() == ["A"]

    def test_default_roster(self):
        resolver = RecipientResolver(StaffRepository(), ProfileRepository())
        assert resolver.get_notifiable_staff() == ["(555) 123-4567", "(555) 234-5678", "(555) 345-6789"]


# ══════════════════════════════════════════════════════════════════════════
# SINGLE SENDS
# ══════════════════════════════════════════════════════════════════════════
class TestNotifyStaff:
    @pytest.mark.asyncio
    async def test_new_case_message(self):
        sms = FakeSmsClient()
        result = await _dispatcher(sms).notify_staff("+15551112222", NEW_CASE)
        assert result.success is True
        assert result.message_sid.startswith("SM")
        assert len(sms.sent) == 1
        msg = sms.sent[0]
        assert msg["from"] == FROM_NUMBER
        assert msg["to"] == "+15551112222"
        assert "NEW FIRST CALL" in msg["body"]
        assert "Deceased: Eleanor Vance" in msg["body"]
        assert "Next of Kin: Margaret Vance" in msg["body"]
        assert "Location: St. Mary's Hospital" in msg["body"]
        assert f"{APP_URL}/first-call?case=case-123" in msg["body"]

    @pytest.mark.asyncio
    async def test_document_signed_message(self):
        sms = FakeSmsClient()
        await _dispatcher(sms).notify_staff("+15551112222", SIGNED)
        body = sms.sent[0]["body"]
        assert "DOCUMENT SIGNED" in body
        assert "Margaret Vance signed Cremation Authorization" in body
        assert "Case: Eleanor Vance" in body
        assert "first-call?case=case-123" in body

    @pytest.mark.asyncio
    async def test_provider_failure(self):
        sms = FakeSmsClient(fail_for={"+15559999999"})
        result = await _dispatcher(sms).notify_staff("+15559999999", NEW_CASE)
        assert result.success is False
        assert "invalid number" in result.error
        assert result.message_sid is None

    @pytest.mark.asyncio
    async def test_timeout_is_failure(self):
        sms = FakeSmsClient(hang_for={"+15550000001"})
        result = await _dispatcher(sms, timeout=0.05).notify_staff("+15550000001", NEW_CASE)
        assert result.success is False
        assert "timed out" in result.error


class TestSignatureLink:
    @pytest.mark.asyncio
    async def test_body(self):
        sms = FakeSmsClient()
        result = await _dispatcher(sms).send_signature_link(
            "+15553334444", "Margaret", "Eleanor Vance", "https://sign.test/abc",
        )
        assert result.success is True
        body = sms.sent[0]["body"]
        assert body.startswith("Hi Margaret, please sign the documents for Eleanor Vance's arrangements.")
        assert "https://sign.test/abc" in body
        assert body.endswith("RitePath Funeral Services")

    @pytest.mark.asyncio
    async def test_single_attempt_on_failure(self):
        sms = FakeSmsClient(fail_for={"+15553334444"})
        result = await _dispatcher(sms).send_signature_link("+15553334444", "M", "E", "https://s")
        assert result.success is False
        assert len(sms.sent) == 1


class TestUrgent:
    @pytest.mark.asyncio
    async def test_body(self):
        sms = FakeSmsClient()
        await _dispatcher(sms).notify_staff_urgent("+15551112222", "Family arriving early")
        assert sms.sent[0]["body"].startswith("\U0001F6A8 URGENT: Family arriving early")


# ══════════════════════════════════════════════════════════════════════════
# FAN-OUT
# ══════════════════════════════════════════════════════════════════════════
class TestFanOut:
    @pytest.mark.asyncio
    async def test_partial_failure(self):
        phones = ["p1", "p2", "p3", "p4"]
        sms = FakeSmsClient(fail_for={"p2", "p4"})
        result = await _dispatcher(sms).notify_all_staff_new_case(phones, NEW_CASE)
        assert result.success is True
        assert result.total_sent == 2
        assert result.total_failed == 2
        assert [r.phone for r in result.results] == phones
        assert [r.success for r in result.results] == [True, False, True, False]
        assert sorted(sms.recipients) == sorted(phones)

    @pytest.mark.asyncio
    async def test_total_failure(self):
        phones = ["p1", "p2", "p3"]
        sms = FakeSmsClient(fail_for=set(phones))
        result = await _dispatcher(sms).notify_all_staff_document_signed(phones, SIGNED)
        assert result.success is False
        assert result.total_sent == 0
        assert result.total_failed == 3

    @pytest.mark.asyncio
    async def test_empty_phone_list(self):
        result = await _dispatcher(FakeSmsClient()).notify_all_staff_new_case([], NEW_CASE)
        assert result.success is False
        assert result.total_sent == 0
        assert result.total_failed == 0
        assert result.results == []

    @pytest.mark.asyncio
    async def test_unexpected_error_does_not_abort_siblings(self):
        sms = FakeSmsClient(crash_for={"p1"})
        result = await _dispatcher(sms).notify_all_staff(["p1", "p2", "p3"], "Staff meeting at 9")
        assert result.total_sent == 2
        assert result.total_failed == 1
        assert "unexpected failure" in result.results[0].error
        assert sorted(sms.recipients) == ["p1", "p2", "p3"]

    @pytest.mark.asyncio
    async def test_hung_send_times_out_without_blocking_others(self):
        sms = FakeSmsClient(hang_for={"p2"})
        result = await _dispatcher(sms, timeout=0.1).notify_all_staff_new_case(["p1", "p2", "p3"], NEW_CASE)
        assert result.total_sent == 2
        assert result.total_failed == 1
        assert result.results[1].success is False

    @pytest.mark.asyncio
    async def test_sends_are_concurrent(self):
        phones = ["p1", "p2", "p3", "p4"]
        all_started = asyncio.Event()
        started = []

        class BarrierSms(FakeSmsClient):
            async def send_message(self, from_number, to, body):
                started.append(to)
                if len(started) == len(phones):
                    all_started.set()
                # A sequential dispatcher never gets past the first recipient
                await all_started.wait()
                return await super().send_message(from_number, to, body)

        result = await _dispatcher(BarrierSms(), timeout=1.0).notify_all_staff(phones, "hello")
        assert result.total_sent == 4

    @pytest.mark.asyncio
    async def test_serialises_camel_case(self):
        result = await _dispatcher(FakeSmsClient(fail_for={"p2"})).notify_all_staff(["p1", "p2"], "hi")
        data = result.model_dump(by_alias=True)
        assert data["totalSent"] == 1
        assert data["totalFailed"] == 1
        assert data["results"][0]["messageSid"].startswith("SM")


# ══════════════════════════════════════════════════════════════════════════
# TWILIO CLIENT
# ══════════════════════════════════════════════════════════════════════════
def _twilio(handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return http, TwilioSmsClient(http, account_sid="AC123", auth_token="secret")


class TestTwilioSmsClient:
    @pytest.mark.asyncio
    async def test_success(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["form"] = dict(httpx.QueryParams(request.content.decode()))
            return httpx.Response(201, json={"sid": "SM0001", "status": "queued"})

        http, client = _twilio(handler)
        async with http:
            sid = await client.send_message("+15550000000", "+15551112222", "hello")
        assert sid == "SM0001"
        assert seen["url"] == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
        assert seen["auth"].startswith("Basic ")
        assert seen["form"] == {"From": "+15550000000", "To": "+15551112222", "Body": "hello"}

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        def handler(request):
            return httpx.Response(400, json={"code": 21211, "message": "The 'To' number is not valid."})

        http, client = _twilio(handler)
        async with http:
            with pytest.raises(SmsSendError) as exc_info:
                await client.send_message("+1", "bad", "hello")
        assert exc_info.value.status_code == 400
        assert "not valid" in str(exc_info.value)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(201, text="<html>gateway</html>"),
        httpx.Response(201, json={"status": "queued"}),
        httpx.Response(200, json=["SM0001"]),
        httpx.Response(201, json={"sid": None}),
    ])
    async def test_success_status_without_sid_raises(self, response):
        def handler(request):
            return response

        http, client = _twilio(handler)
        async with http:
            with pytest.raises(SmsSendError) as exc_info:
                await client.send_message("+1", "+2", "hello")
        assert "without a message sid" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unparseable_success_reported_as_failed_send(self):
        def handler(request):
            return httpx.Response(201, text="not json")

        http, client = _twilio(handler)
        dispatcher = NotificationDispatcher(client, from_number=FROM_NUMBER, app_url=APP_URL)
        async with http:
            result = await dispatcher.notify_staff_urgent("+15551112222", "Family arriving")
        assert result.success is False
        assert "without a message sid" in result.error

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        http, client = _twilio(handler)
        async with http:
            with pytest.raises(SmsSendError):
                await client.send_message("+1", "+2", "hello")

    @pytest.mark.asyncio
    async def test_mock_mode_when_unconfigured(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = TwilioSmsClient(http)
        async with http:
            sid = await client.send_message("+1", "+2", "hello")
        assert client.configured is False
        assert sid.startswith("SMmock")
        assert calls == []
