"""Testes do MemoryOtpStore."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from app.infra.stores.memory_stores import MemoryOtpStore
from tests.fakes.fake_otp import FakeClock

PHONE = "+15551234567"


def _store(clock: FakeClock, max_attempts: int = 3) -> MemoryOtpStore:
    return MemoryOtpStore(max_attempts=max_attempts, clock=clock)


class TestIssueAndGet:
    """Emissão e leitura de desafios."""

    def test_issue_then_get_returns_fresh_challenge(self) -> None:
        clock = FakeClock()
        store = _store(clock)

        store.issue(PHONE, "123456", ttl_minutes=5)
        challenge = store.get(PHONE)

        assert challenge is not None
        assert challenge.code == "123456"
        assert challenge.attempts == 0
        assert challenge.expires_at == clock.now + 300
        assert challenge.created_at == clock.now

    def test_get_unknown_phone_returns_none(self) -> None:
        store = _store(FakeClock())
        assert store.get("+5511999999999") is None

    def test_issue_overwrites_and_resets_attempts(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "111111")
        store.register_failed_attempt(PHONE)
        store.register_failed_attempt(PHONE)

        clock.advance(60)
        store.issue(PHONE, "222222", ttl_minutes=10)
        challenge = store.get(PHONE)

        assert challenge is not None
        assert challenge.code == "222222"
        assert challenge.attempts == 0
        assert challenge.expires_at == clock.now + 600

    def test_issue_accepts_any_phone_and_code(self) -> None:
        """O store não valida formato; isso é papel do use case."""
        store = _store(FakeClock())
        store.issue("not-a-phone", "abc")
        challenge = store.get("not-a-phone")
        assert challenge is not None
        assert challenge.code == "abc"

    def test_get_returns_copy(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")

        challenge = store.get(PHONE)
        assert challenge is not None
        challenge.attempts = 99

        fresh = store.get(PHONE)
        assert fresh is not None
        assert fresh.attempts == 0


class TestExpiry:
    """Expiração lazy na leitura."""

    def test_challenge_valid_just_before_expiry(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "123456", ttl_minutes=5)

        clock.advance(299.999)

        assert store.get(PHONE) is not None

    def test_challenge_expired_at_exact_instant(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "123456", ttl_minutes=5)

        clock.advance(300)

        assert store.get(PHONE) is None
        assert store.stats().total == 0

    def test_expired_read_removes_entry_even_if_clock_rewinds(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "123456", ttl_minutes=1)

        clock.advance(61)
        assert store.get(PHONE) is None

        clock.advance(-61)
        assert store.get(PHONE) is None

    def test_clock_rewind_before_read_keeps_original_deadline(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "123456", ttl_minutes=1)
        deadline = clock.now + 60

        clock.advance(-30)
        challenge = store.get(PHONE)

        assert challenge is not None
        assert challenge.expires_at == deadline

    def test_register_failed_attempt_on_expired_returns_false(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "123456", ttl_minutes=1)

        clock.advance(60)

        assert store.register_failed_attempt(PHONE) is False
        assert store.stats().total == 0


class TestAttempts:
    """Contagem de tentativas e bloqueio."""

    def test_register_failed_attempt_absent_returns_false(self) -> None:
        store = _store(FakeClock())

        assert store.register_failed_attempt(PHONE) is False
        assert store.get(PHONE) is None

    def test_register_failed_attempt_increments(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")

        assert store.register_failed_attempt(PHONE) is True
        assert store.register_failed_attempt(PHONE) is True

        challenge = store.get(PHONE)
        assert challenge is not None
        assert challenge.attempts == 2

    def test_reaching_max_attempts_deletes_challenge(self) -> None:
        store = _store(FakeClock(), max_attempts=3)
        store.issue(PHONE, "123456")

        for _ in range(3):
            assert store.register_failed_attempt(PHONE) is True

        assert store.get(PHONE) is None
        assert store.register_failed_attempt(PHONE) is False

    def test_increment_attempts_returns_count_after_increment(self) -> None:
        store = _store(FakeClock(), max_attempts=3)
        store.issue(PHONE, "123456")

        assert store.increment_attempts(PHONE) == 1
        assert store.increment_attempts(PHONE) == 2
        assert store.increment_attempts(PHONE) == 3
        assert store.increment_attempts(PHONE) is None

    def test_concurrent_increments_are_not_lost(self) -> None:
        store = _store(FakeClock(), max_attempts=1000)
        store.issue(PHONE, "123456")

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: store.register_failed_attempt(PHONE), range(200)))

        assert all(results)
        challenge = store.get(PHONE)
        assert challenge is not None
        assert challenge.attempts == 200


class TestConsume:
    """Comparação e remoção atômicas."""

    def test_matching_code_consumes_challenge(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")

        assert store.consume(PHONE, "123456") is True
        assert store.get(PHONE) is None
        assert store.consume(PHONE, "123456") is False

    def test_mismatch_keeps_challenge_untouched(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")

        assert store.consume(PHONE, "000000") is False

        challenge = store.get(PHONE)
        assert challenge is not None
        assert challenge.attempts == 0

    def test_old_code_does_not_consume_reissued_challenge(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")
        store.issue(PHONE, "999999")

        assert store.consume(PHONE, "123456") is False
        challenge = store.get(PHONE)
        assert challenge is not None
        assert challenge.code == "999999"

    def test_expired_challenge_is_not_consumed(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "123456", ttl_minutes=1)

        clock.advance(60)

        assert store.consume(PHONE, "123456") is False
        assert store.stats().total == 0

    def test_concurrent_consumers_succeed_once(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: store.consume(PHONE, "123456"), range(50)))

        assert results.count(True) == 1


class TestDeleteAndSweep:
    """Remoção explícita e sweep periódico."""

    def test_delete_is_idempotent(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")

        assert store.delete(PHONE) is True
        assert store.delete(PHONE) is False
        assert store.get(PHONE) is None

    def test_sweep_removes_only_expired(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue("+15550000001", "111111", ttl_minutes=1)
        store.issue("+15550000002", "222222", ttl_minutes=1)
        store.issue("+15550000003", "333333", ttl_minutes=10)

        clock.advance(120)
        removed = store.sweep()

        assert removed == 2
        stats = store.stats()
        assert stats.total == 1
        assert stats.valid == 1
        assert store.get("+15550000003") is not None

    def test_sweep_on_empty_store(self) -> None:
        assert _store(FakeClock()).sweep() == 0

    def test_stats_counts_expired_before_sweep(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue("+15550000001", "111111", ttl_minutes=1)
        store.issue("+15550000002", "222222", ttl_minutes=10)

        clock.advance(90)

        assert store.stats().as_dict() == {"total": 2, "expired": 1, "valid": 1}

    def test_clear_empties_store(self) -> None:
        store = _store(FakeClock())
        store.issue(PHONE, "123456")
        store.clear()
        assert store.stats().total == 0


class TestDerivedQueries:
    """remaining_seconds, remaining_attempts e is_valid."""

    def test_remaining_seconds_rounds_up(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        store.issue(PHONE, "123456", ttl_minutes=5)

        clock.advance(100.5)

        assert store.remaining_seconds(PHONE) == 200

    def test_remaining_seconds_absent_is_zero(self) -> None:
        assert _store(FakeClock()).remaining_seconds(PHONE) == 0

    def test_remaining_attempts(self) -> None:
        store = _store(FakeClock(), max_attempts=3)
        store.issue(PHONE, "123456")
        store.register_failed_attempt(PHONE)

        assert store.remaining_attempts(PHONE) == 2
        assert store.remaining_attempts("+15559999999") == 0

    def test_is_valid(self) -> None:
        clock = FakeClock()
        store = _store(clock)
        assert store.is_valid(PHONE) is False

        store.issue(PHONE, "123456", ttl_minutes=1)
        assert store.is_valid(PHONE) is True

        clock.advance(60)
        assert store.is_valid(PHONE) is False
