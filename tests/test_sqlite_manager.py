"""
Behaviour of the DatabaseManager contract as implemented by SQLiteManager.
"""
from __future__ import annotations

import logging

from itemtracker.domain.entities import Loanable, Loanee
from itemtracker.repositories.base import DatabaseManager
from itemtracker.repositories.sqlite_manager import SQLiteManager


def _ann() -> Loanee:
    return Loanee(id=None, first_name="Ann", last_name="Lee", email="a@x.com", barcode="LE1")


def test_manager_satisfies_contract(store):
    assert isinstance(store, DatabaseManager)


def test_store_path_uses_forward_slashes():
    manager = SQLiteManager("C:\\data\\items\\store.db")
    assert manager.db_location == "C:/data/items/store.db"


def test_fresh_database_is_empty(store):
    assert store.get_loanables() == []
    assert store.get_loanees() == []
    assert store.get_loans() == []


def test_create_database_discards_existing_rows(store):
    assert store.add_loanable(Loanable(id=None, name="Drill", barcode="LB1"))
    assert store.add_loanee(_ann())

    assert store.create_database() is True

    assert store.get_loanables() == []
    assert store.get_loanees() == []
    assert store.get_loans() == []
    assert store.get_loanable("LB1") is None


def test_added_loanable_is_active_and_round_trips(store):
    assert store.add_loanable(Loanable(id=None, name="Drill", barcode="LB1", active=False)) is True

    by_barcode = store.get_loanable("LB1")
    assert by_barcode.active is True
    assert by_barcode.name == "Drill"
    assert by_barcode.barcode == "LB1"
    assert store.get_loanable(by_barcode.id) == by_barcode


def test_added_loanee_round_trips(store):
    assert store.add_loanee(_ann()) is True
    assert store.add_loanee(Loanee(id=None, first_name="Bo", last_name="Kim", email=None, barcode="LE2")) is True

    ann = store.get_loanee("LE1")
    assert (ann.first_name, ann.last_name, ann.email, ann.barcode, ann.active) == ("Ann", "Lee", "a@x.com", "LE1", True)
    assert store.get_loanee(ann.id) == ann
    assert store.get_loanee("LE2").email is None
    assert [loanee.barcode for loanee in store.get_loanees()] == ["LE1", "LE2"]


def test_removed_loanable_is_hidden_from_listing_but_not_from_lookups(store):
    store.add_loanable(Loanable(id=None, name="Drill", barcode="LB1"))
    store.add_loanable(Loanable(id=None, name="Saw", barcode="LB2"))
    drill = store.get_loanable("LB1")

    assert store.remove_loanable(drill) is True

    assert [item.barcode for item in store.get_loanables()] == ["LB2"]
    by_id = store.get_loanable(drill.id)
    assert by_id is not None
    assert by_id.active is False
    assert store.get_loanable("LB1").active is False


def test_removed_loanee_is_hidden_from_listing(store):
    store.add_loanee(_ann())
    ann = store.get_loanee("LE1")

    assert store.remove_loanee(ann) is True
    assert store.get_loanees() == []
    assert store.get_loanee(ann.id).active is False


def test_remove_loanee_by_barcode_only(store):
    store.add_loanee(_ann())
    assert store.remove_loanee(Loanee(id=None, first_name="", last_name="", email=None, barcode="LE1")) is True
    assert store.get_loanees() == []


def test_writes_without_matching_rows_report_false(store):
    ghost = Loanable(id=42, name="Ghost", barcode="G")
    assert store.remove_loanable(ghost) is False
    assert store.remove_loan(ghost) is False
    assert store.remove_loanee(Loanee(id=42, first_name="", last_name="", email=None, barcode="G")) is False


def test_missing_lookups_return_none(store):
    assert store.get_loanable(1) is None
    assert store.get_loanable("LB404") is None
    assert store.get_loanee(1) is None
    assert store.get_loanee("LE404") is None


def test_lookup_with_unusable_key_logs_and_returns_none(store, caplog):
    with caplog.at_level(logging.ERROR, logger="itemtracker"):
        assert store.get_loanable(1.5) is None
        assert store.get_loanee(None) is None
        assert store.get_loanable(True) is None
    assert "Loanable key must be an int id or a str barcode, not 1.5" in caplog.text
    assert "Loanee key must be an int id or a str barcode, not None" in caplog.text


def test_add_loan_creates_one_outstanding_loan(store, fixed_today):
    store.add_loanable(Loanable(id=None, name="Drill", barcode="LB1"))
    store.add_loanee(_ann())
    drill = store.get_loanable("LB1")
    ann = store.get_loanee("LE1")

    assert store.add_loan(drill, ann) is True

    loans = store.get_loans()
    assert len(loans) == 1
    assert loans[0].check_in is None
    assert loans[0].check_out == fixed_today
    assert loans[0].loanable == drill
    assert loans[0].loanee == ann


def test_loan_lifecycle_scenario(store, fixed_today):
    assert store.create_database() is True
    assert store.add_loanee(_ann()) is True
    assert store.add_loanable(Loanable(id=None, name="Drill", barcode="LB1")) is True
    ann = store.get_loanee("LE1")
    drill = store.get_loanable("LB1")

    assert store.add_loan(drill, ann) is True
    outstanding = store.get_loans()
    assert len(outstanding) == 1
    assert outstanding[0].check_in is None

    assert store.remove_loan(drill) is True
    assert store.get_loans() == []

    history = store.get_loans(ann)
    assert len(history) == 1
    assert history[0].check_in == fixed_today
    assert history[0].is_outstanding is False


def test_loans_are_ordered_by_id(store):
    for n in range(3):
        store.add_loanable(Loanable(id=None, name=f"Item {n}", barcode=f"LB{n}"))
    store.add_loanee(_ann())
    ann = store.get_loanee("LE1")
    for item in reversed(store.get_loanables()):
        store.add_loan(item, ann)

    assert [loan.id for loan in store.get_loans()] == [1, 2, 3]
    assert [loan.loanable.barcode for loan in store.get_loans(ann)] == ["LB2", "LB1", "LB0"]


def test_unreachable_store_degrades_to_sentinels(tmp_path):
    manager = SQLiteManager(str(tmp_path / "missing" / "store.db"))
    drill = Loanable(id=1, name="Drill", barcode="LB1")
    ann = Loanee(id=1, first_name="Ann", last_name="Lee", email=None, barcode="LE1")

    assert manager.create_database() is False
    assert manager.add_loanable(drill) is False
    assert manager.add_loanee(ann) is False
    assert manager.add_loan(drill, ann) is False
    assert manager.remove_loan(drill) is False
    assert manager.remove_loanable(drill) is False
    assert manager.remove_loanee(ann) is False
    assert manager.get_loanable(1) is None
    assert manager.get_loanable("LB1") is None
    assert manager.get_loanee(1) is None
    assert manager.get_loanee("LE1") is None
    assert manager.get_loanables() is None
    assert manager.get_loanees() is None
    assert manager.get_loans() is None
    assert manager.get_loans(ann) is None


def test_connect_and_disconnect(store, tmp_path):
    store.disconnect()
    assert store.is_connected is False

    store.connect()
    assert store.is_connected is True
    store.connect()
    assert store.is_connected is True

    store.disconnect()
    store.disconnect()
    assert store.is_connected is False

    unreachable = SQLiteManager(str(tmp_path / "missing" / "store.db"))
    unreachable.connect()
    assert unreachable.is_connected is False
    unreachable.disconnect()


def test_operations_work_while_a_connection_is_held(db_path):
    with SQLiteManager(str(db_path)) as manager:
        assert manager.is_connected
        assert manager.create_database() is True
        assert manager.add_loanable(Loanable(id=None, name="Drill", barcode="LB1")) is True
        assert manager.get_loanable("LB1").name == "Drill"
    assert manager.is_connected is False
