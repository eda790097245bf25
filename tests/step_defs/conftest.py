"""
Steps shared by every catalog feature.
"""
import json
from typing import List

import pytest
from pytest_bdd import given, parsers, then, when

from culture_kernel.kernel.codec import decode_all
from culture_kernel.kernel.errors import StoreIOError
from culture_kernel.kernel.store import CatalogStore


def _split_ids(ids: str) -> List[str]:
    return [i.strip() for i in ids.split(",") if i.strip()]


@pytest.fixture
def split_ids():
    """Parser for the comma separated id lists used in step text."""
    return _split_ids


@pytest.fixture
def test_context():
    """Shared context for passing data between steps."""
    return {
        "store": None,
        "source": None,
        "error": None,
        "seeded": None,
        "response": None,
    }


# =============================================================================
# Given
# =============================================================================


@given("a fresh catalog database")
def fresh_database(test_context, temp_db):
    test_context["store"] = CatalogStore(temp_db)


@given("the catalog database path is a directory")
def database_path_is_directory(test_context, tmp_path):
    test_context["store"] = CatalogStore(str(tmp_path))


@given(parsers.parse('the catalog holds rituals "{ids}"'))
def catalog_holds(test_context, make_ritual, ids: str):
    test_context["store"].put_all([make_ritual(rid) for rid in _split_ids(ids)])


@given(parsers.parse('a definition source with rituals "{ids}"'))
def definition_source(test_context, tmp_path, ritual_data, ids: str):
    # Names carry the position so a duplicate id's last occurrence is recognisable
    entries = [ritual_data(rid, name=f"{rid} #{i}") for i, rid in enumerate(_split_ids(ids))]
    path = tmp_path / "rituals.json"
    path.write_text(json.dumps(entries))
    test_context["source"] = path
    test_context["source_entries"] = entries


# =============================================================================
# When
# =============================================================================


@when("the catalog table is dropped")
def drop_table(test_context):
    test_context["store"].drop()


# =============================================================================
# Then
# =============================================================================


@then("the catalog table exists")
def table_exists(test_context):
    assert test_context["store"].exists() is True


@then("the catalog table does not exist")
def table_absent(test_context):
    assert test_context["store"].exists() is False


@then("reading the catalog returns no payloads")
def read_returns_nothing(test_context):
    assert test_context["store"].get_all() == []


@then(parsers.parse("the catalog holds {count:d} payloads"))
def payload_count(test_context, count: int):
    assert len(test_context["store"].get_all()) == count
    assert test_context["store"].count() == count


@then(parsers.parse('the stored ids are "{ids}"'))
def stored_ids(test_context, ids: str):
    rituals = decode_all(test_context["store"].get_all())
    assert [r.id for r in rituals] == _split_ids(ids)


@then(parsers.parse('ritual "{ritual_id}" is named "{name}"'))
def ritual_named(test_context, ritual_id: str, name: str):
    rituals = {r.id: r for r in decode_all(test_context["store"].get_all())}
    assert rituals[ritual_id].name == name


@then("reading the catalog raises a store I/O error")
def read_raises_io_error(test_context):
    with pytest.raises(StoreIOError):
        test_context["store"].get_all()
