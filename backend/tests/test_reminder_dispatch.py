from datetime import datetime, timedelta, timezone
from decimal import Decimal
import pytest

from core.errors import PushNotificationError, WhatsAppAPIError
from core.utils import as_utc
from models.debts import Debt
from models.enums import Currency, DebtStatus
from services.reminders import run_reminder_job
from services.whatsapp import WhatsAppClient

from tests.conftest import NOW, TODAY


class TestRunReminderJob:
    """Selection and dispatch of one reminder run"""

    @pytest.mark.asyncio
    async def test_sends_and_records(self, db, make_customer, make_debt, whatsapp, push):
        debt = make_debt(customer=make_customer(name="Ali", phone="70 123 456"))

        result = await run_reminder_job(db, whatsapp, push, now=NOW, app_url="https://dash.example.com")

        assert result.ok is True
        assert result.today == TODAY
        assert (result.found, result.sent, result.failures) == (1, 1, [])

        to_phone, body = whatsapp.send_text.await_args.args
        assert to_phone == "70 123 456"
        assert body.startswith("Mokhtar Cell | مختار سيل\nHi Ali 👋")

        push.send_to_subscribers.assert_awaited_once_with(
            title="Mokhtar Dashboard - Reminder sent",
            message="WhatsApp reminder sent to Ali (USD 12.50)",
            url="https://dash.example.com",
        )

        db.refresh(debt)
        assert debt.reminder_count == 1
        assert as_utc(debt.reminder_last_sent_at) == NOW

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_batch(self, db, make_debt, whatsapp, push):
        debts = [make_debt(due_date=TODAY - timedelta(days=d)) for d in (3, 2, 1)]
        whatsapp.send_text.side_effect = [None, WhatsAppAPIError(400, "invalid recipient"), None]

        result = await run_reminder_job(db, whatsapp, push, now=NOW)

        assert result.found == 3
        assert result.sent == 2
        assert len(result.failures) == 1
        assert result.failures[0].id == debts[1].id
        assert result.failures[0].err == "WhatsApp API error (400): invalid recipient"

        counts = [db.get(Debt, d.id).reminder_count for d in debts]
        assert counts == [1, 0, 1]
        assert db.get(Debt, debts[1].id).reminder_last_sent_at is None
        assert push.send_to_subscribers.await_count == 2

    @pytest.mark.asyncio
    async def test_push_failure_counts_as_failed_attempt(self, db, make_debt, whatsapp, push):
        debt = make_debt()
        push.send_to_subscribers.side_effect = PushNotificationError(403, "bad key")

        result = await run_reminder_job(db, whatsapp, push, now=NOW)

        assert result.sent == 0
        assert [f.id for f in result.failures] == [debt.id]
        assert db.get(Debt, debt.id).reminder_count == 0

    @pytest.mark.asyncio
    async def test_second_run_same_day_sends_nothing(self, db, make_debt, whatsapp, push):
        make_debt()

        first = await run_reminder_job(db, whatsapp, push, now=NOW)
        second = await run_reminder_job(db, whatsapp, push, now=NOW + timedelta(hours=3))

        assert first.sent == 1
        assert (second.found, second.sent) == (0, 0)
        assert whatsapp.send_text.await_count == 1

    @pytest.mark.asyncio
    async def test_next_day_reminds_again(self, db, make_debt, whatsapp, push):
        debt = make_debt()

        await run_reminder_job(db, whatsapp, push, now=NOW)
        result = await run_reminder_job(db, whatsapp, push, now=NOW + timedelta(days=1))

        assert result.sent == 1
        refreshed = db.get(Debt, debt.id)
        assert refreshed.reminder_count == 2
        assert refreshed.status == DebtStatus.OVERDUE

    @pytest.mark.asyncio
    async def test_phone_less_customers_are_not_attempted(self, db, make_customer, make_debt, whatsapp, push):
        make_debt(customer=make_customer(phone=None))

        result = await run_reminder_job(db, whatsapp, push, now=NOW)

        assert (result.found, result.sent, result.failures) == (1, 0, [])
        whatsapp.send_text.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_credentials_fail_every_recipient(self, db, make_debt, push):
        debts = [make_debt(), make_debt(currency=Currency.LBP, amount=Decimal("900000"))]
        whatsapp = WhatsAppClient(token=None, phone_number_id=None)

        result = await run_reminder_job(db, whatsapp, push, now=NOW)

        assert result.sent == 0
        assert {f.id for f in result.failures} == {d.id for d in debts}
        assert all("Missing WHATSAPP_TOKEN" in f.err for f in result.failures)
        push.send_to_subscribers.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_write_failure_is_isolated(self, db, make_debt, whatsapp, push, monkeypatch):
        from crud import reminders as crud_reminders

        first, second = make_debt(due_date=TODAY - timedelta(days=1)), make_debt()
        original = crud_reminders.record_reminder_sent
        calls = []

        def flaky(session, debt_id, sent_at):
            calls.append(debt_id)
            if debt_id == first.id:
                raise RuntimeError("disk I/O error")
            return original(session, debt_id, sent_at)

        monkeypatch.setattr(crud_reminders, "record_reminder_sent", flaky)

        result = await run_reminder_job(db, whatsapp, push, now=NOW)

        assert result.sent == 1
        assert [(f.id, f.err) for f in result.failures] == [(first.id, "disk I/O error")]
        assert db.get(Debt, second.id).reminder_count == 1
        assert calls == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_offset_aware_now_is_stored_as_utc(self, db, make_debt, whatsapp, push):
        debt = make_debt()
        beirut = timezone(timedelta(hours=3))
        late_evening = datetime(2025, 3, 10, 22, 0, tzinfo=timezone.utc)

        await run_reminder_job(db, whatsapp, push, now=late_evening.astimezone(beirut))
        stamped = db.get(Debt, debt.id).reminder_last_sent_at
        result = await run_reminder_job(db, whatsapp, push, now=late_evening + timedelta(hours=25))

        assert as_utc(stamped) == late_evening
        assert (result.found, result.sent) == (1, 1)
        assert db.get(Debt, debt.id).reminder_count == 2

    @pytest.mark.asyncio
    async def test_compose_failure_is_isolated(self, db, make_debt, whatsapp, push, monkeypatch):
        from services import reminders as reminders_service

        first, second = make_debt(due_date=TODAY - timedelta(days=1)), make_debt()
        original = reminders_service.build_reminder_message

        def broken_for_first(**kwargs):
            if kwargs["due_date"] == first.due_date:
                raise ValueError("Unsupported currency: usd")
            return original(**kwargs)

        monkeypatch.setattr(reminders_service, "build_reminder_message", broken_for_first)

        result = await run_reminder_job(db, whatsapp, push, now=NOW)

        assert result.sent == 1
        assert [(f.id, f.err) for f in result.failures] == [(first.id, "Unsupported currency: usd")]
        assert db.get(Debt, second.id).reminder_count == 1
