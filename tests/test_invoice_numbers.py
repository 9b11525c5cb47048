import json
import random
from datetime import date

from carebill.invoice_numbers import (
    DraftInvoiceNumberGenerator,
    FileInvoiceNumberGenerator,
    RandomInvoiceNumberGenerator,
    SequentialInvoiceNumberGenerator,
)


class TestRandomInvoiceNumberGenerator:
    def test_format(self):
        gen = RandomInvoiceNumberGenerator(random.Random(1))
        number = gen.next_number(date(2025, 3, 15))
        assert number.startswith("INV-202503-")
        suffix = number.rsplit("-", 1)[1]
        assert len(suffix) == 4
        assert 1000 <= int(suffix) <= 9999

    def test_seeded_is_reproducible(self):
        a = RandomInvoiceNumberGenerator(random.Random(99))
        b = RandomInvoiceNumberGenerator(random.Random(99))
        day = date(2025, 11, 1)
        assert [a.next_number(day) for _ in range(5)] == [b.next_number(day) for _ in range(5)]

    def test_month_zero_padded(self):
        gen = RandomInvoiceNumberGenerator(random.Random(0))
        assert gen.next_number(date(2026, 1, 15)).startswith("INV-202601-")


class TestSequentialInvoiceNumberGenerator:
    def test_increments_within_month(self):
        gen = SequentialInvoiceNumberGenerator()
        day = date(2025, 3, 15)
        assert gen.next_number(day) == "INV-202503-0001"
        assert gen.next_number(day) == "INV-202503-0002"
        assert gen.last_issued(2025, 3) == 2

    def test_counter_keyed_by_month(self):
        gen = SequentialInvoiceNumberGenerator()
        gen.next_number(date(2025, 3, 15))
        assert gen.next_number(date(2025, 4, 15)) == "INV-202504-0001"
        assert gen.last_issued(2025, 3) == 1

    def test_continues_existing_sequence(self):
        gen = SequentialInvoiceNumberGenerator(start_at={"2025-03": 41})
        assert gen.next_number(date(2025, 3, 1)) == "INV-202503-0042"

    def test_unique(self):
        gen = SequentialInvoiceNumberGenerator()
        numbers = {gen.next_number(date(2025, 3, 15)) for _ in range(50)}
        assert len(numbers) == 50


class TestFileInvoiceNumberGenerator:
    def test_persists_between_instances(self, tmp_path):
        path = tmp_path / "counters.json"
        day = date(2025, 3, 15)

        first = FileInvoiceNumberGenerator(path)
        assert [first.next_number(day), first.next_number(day)] == ["INV-202503-0001", "INV-202503-0002"]

        second = FileInvoiceNumberGenerator(path)
        assert second.next_number(day) == "INV-202503-0003"
        assert json.loads(path.read_text()) == {"2025-03": 3}

    def test_missing_file_starts_fresh(self, tmp_path):
        gen = FileInvoiceNumberGenerator(tmp_path / "nested" / "counters.json")
        assert gen.last_issued(2025, 3) == 0
        assert gen.next_number(date(2025, 3, 1)) == "INV-202503-0001"
        assert (tmp_path / "nested" / "counters.json").exists()

    def test_months_tracked_separately(self, tmp_path):
        path = tmp_path / "counters.json"
        path.write_text(json.dumps({"2025-02": 17}))
        gen = FileInvoiceNumberGenerator(path)
        assert gen.next_number(date(2025, 3, 1)) == "INV-202503-0001"
        assert gen.next_number(date(2025, 2, 28)) == "INV-202502-0018"


class TestDraftInvoiceNumberGenerator:
    def test_draft_number(self):
        gen = DraftInvoiceNumberGenerator()
        assert gen.next_number(date(2025, 3, 15)) == "INV-202503-DRAFT"
        assert gen.next_number(date(2025, 3, 15)) == "INV-202503-DRAFT"
