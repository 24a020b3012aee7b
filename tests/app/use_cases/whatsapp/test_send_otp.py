"""Testes do SendOtpUseCase."""

from __future__ import annotations

import threading

import pytest

from app.constants.otp import SendOtpStatus
from app.domain.otp_challenge import OtpChallenge
from app.infra.stores.memory_stores import MemoryOtpStore
from app.protocols.otp_sender import OtpDeliveryResult
from app.use_cases.whatsapp.send_otp import SendOtpUseCase
from tests.fakes.fake_otp import FakeClock, FakeOtpSender

PHONE = "+15551234567"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryOtpStore:
    return MemoryOtpStore(clock=clock)


@pytest.mark.asyncio
async def test_issues_and_delivers_code(store: MemoryOtpStore) -> None:
    sender = FakeOtpSender()
    use_case = SendOtpUseCase(store, sender, ttl_minutes=5)

    result = await use_case.execute(PHONE)

    assert result.status == SendOtpStatus.SENT
    assert result.message == "OTP sent successfully"
    assert result.debug_code is None
    assert len(sender.sent) == 1
    phone, code, ttl = sender.sent[0]
    assert phone == PHONE
    assert ttl == 5
    assert len(code) == 6 and code.isdigit()
    challenge = store.get(PHONE)
    assert challenge is not None
    assert challenge.code == code


@pytest.mark.asyncio
async def test_debug_code_exposed_when_enabled(store: MemoryOtpStore) -> None:
    sender = FakeOtpSender()
    use_case = SendOtpUseCase(store, sender, expose_debug_code=True)

    result = await use_case.execute(PHONE)

    assert result.debug_code == sender.sent[0][1]


@pytest.mark.asyncio
@pytest.mark.parametrize("phone", [None, ""])
async def test_missing_phone(store: MemoryOtpStore, phone: str | None) -> None:
    sender = FakeOtpSender()

    result = await SendOtpUseCase(store, sender).execute(phone)

    assert result.status == SendOtpStatus.MISSING_PHONE
    assert result.message == "Phone number is required"
    assert sender.sent == []


@pytest.mark.asyncio
@pytest.mark.parametrize("phone", ["15551234567", "+0551234567", "+1", "+1555abc4567"])
async def test_invalid_phone_format(store: MemoryOtpStore, phone: str) -> None:
    sender = FakeOtpSender()

    result = await SendOtpUseCase(store, sender).execute(phone)

    assert result.status == SendOtpStatus.INVALID_PHONE
    assert "country code" in result.message
    assert store.stats().total == 0


@pytest.mark.asyncio
async def test_not_configured(store: MemoryOtpStore) -> None:
    sender = FakeOtpSender()

    result = await SendOtpUseCase(store, sender, sender_configured=False).execute(PHONE)

    assert result.status == SendOtpStatus.NOT_CONFIGURED
    assert sender.sent == []
    assert store.get(PHONE) is None


@pytest.mark.asyncio
async def test_pending_challenge_blocks_resend(clock: FakeClock, store: MemoryOtpStore) -> None:
    store.issue(PHONE, "123456", ttl_minutes=5)
    clock.advance(30)
    sender = FakeOtpSender()

    result = await SendOtpUseCase(store, sender).execute(PHONE)

    assert result.status == SendOtpStatus.ALREADY_PENDING
    assert result.remaining_seconds == 270
    assert sender.sent == []
    challenge = store.get(PHONE)
    assert challenge is not None
    assert challenge.code == "123456"


@pytest.mark.asyncio
async def test_resend_allowed_after_expiry(clock: FakeClock, store: MemoryOtpStore) -> None:
    store.issue(PHONE, "123456", ttl_minutes=5)
    clock.advance(300)

    result = await SendOtpUseCase(store, FakeOtpSender()).execute(PHONE)

    assert result.status == SendOtpStatus.SENT


@pytest.mark.asyncio
async def test_delivery_failure_removes_challenge(store: MemoryOtpStore) -> None:
    sender = FakeOtpSender(
        result=OtpDeliveryResult(success=False, error_message="Rate limit exceeded.")
    )

    result = await SendOtpUseCase(store, sender).execute(PHONE)

    assert result.status == SendOtpStatus.DELIVERY_FAILED
    assert result.message == "Rate limit exceeded."
    assert store.get(PHONE) is None


@pytest.mark.asyncio
async def test_delivery_failure_without_message(store: MemoryOtpStore) -> None:
    sender = FakeOtpSender(result=OtpDeliveryResult(success=False))

    result = await SendOtpUseCase(store, sender).execute(PHONE)

    assert result.message == "Failed to send OTP via WhatsApp"


@pytest.mark.asyncio
async def test_sender_exception_removes_challenge_and_propagates(store: MemoryOtpStore) -> None:
    sender = FakeOtpSender(error=RuntimeError("boom"))

    with pytest.raises(RuntimeError, match="boom"):
        await SendOtpUseCase(store, sender).execute(PHONE)

    assert store.get(PHONE) is None


class _ThreadRecordingStore(MemoryOtpStore):
    """Registra a thread de cada acesso ao store."""

    def __init__(self, clock: FakeClock) -> None:
        super().__init__(clock=clock)
        self.threads: list[threading.Thread] = []

    def get(self, phone_number: str) -> OtpChallenge | None:
        self.threads.append(threading.current_thread())
        return super().get(phone_number)

    def issue(self, phone_number: str, code: str, ttl_minutes: float = 5) -> None:
        self.threads.append(threading.current_thread())
        super().issue(phone_number, code, ttl_minutes)

    def delete(self, phone_number: str) -> bool:
        self.threads.append(threading.current_thread())
        return super().delete(phone_number)


@pytest.mark.asyncio
async def test_store_access_runs_off_event_loop_thread(clock: FakeClock) -> None:
    store = _ThreadRecordingStore(clock)
    loop_thread = threading.current_thread()

    await SendOtpUseCase(store, FakeOtpSender()).execute(PHONE)
    await SendOtpUseCase(
        store, FakeOtpSender(result=OtpDeliveryResult(success=False))
    ).execute("+15557654321")

    assert len(store.threads) >= 4
    assert all(thread is not loop_thread for thread in store.threads)
