from types import SimpleNamespace
from uuid import uuid4

from journal_coach.auth.phone import generate_otp, is_valid_phone, normalize_phone
from journal_coach.auth.reconcile import plan_user_merge


def _user(phone, days_ago, days_ago_fixture):
    return SimpleNamespace(id=uuid4(), phone_number=phone, created_at=days_ago_fixture(days_ago))


class TestPhone:
    def test_normalize(self):
        assert normalize_phone("+1 (555) 010-9999") == "15550109999"
        assert normalize_phone(None) == ""

    def test_validity(self):
        assert is_valid_phone("15550109999")
        assert not is_valid_phone("555")
        assert not is_valid_phone("1" * 16)

    def test_otp_is_six_digits(self):
        code = generate_otp()
        assert len(code) == 6 and code.isdigit()


class TestPlanUserMerge:
    def test_no_match(self, days_ago):
        users = [_user("+44 20 7946 0000", 1, days_ago)]
        assert plan_user_merge(users, [], "15550109999") is None

    def test_single_match_has_no_duplicates(self, days_ago):
        user = _user("15550109999", 1, days_ago)
        plan = plan_user_merge([user], [], "15550109999")
        assert plan.primary_id == user.id
        assert not plan.has_duplicates

    def test_earliest_user_wins_and_entries_move(self, days_ago):
        oldest = _user("+1 555 010 9999", 30, days_ago)
        newer = _user("1-555-010-9999", 2, days_ago)
        other = _user("+1 555 010 0000", 40, days_ago)
        entries = [
            SimpleNamespace(id=uuid4(), user_id=oldest.id),
            SimpleNamespace(id=uuid4(), user_id=newer.id),
            SimpleNamespace(id=uuid4(), user_id=other.id),
        ]
        plan = plan_user_merge([newer, other, oldest], entries, "15550109999")
        assert plan.primary_id == oldest.id
        assert plan.duplicate_ids == [newer.id]
        assert plan.reassigned_entry_ids == [entries[1].id]
        assert entries[1].user_id == newer.id
