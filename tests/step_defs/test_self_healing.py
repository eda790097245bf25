"""
Step definitions for the Self-healing initialization feature.

These tests verify ensure_seeded and seed:
- seeding only when the rituals table is absent
- idempotence (overwrite by id, last occurrence wins)
- fatal InitError for missing, malformed or invalid sources
"""
import json

import yaml
from pytest_bdd import given, parsers, scenarios, then, when

from culture_kernel.kernel.codec import decode_all
from culture_kernel.kernel.errors import InitError
from culture_kernel.kernel.seeding import ensure_seeded, seed

# Load scenarios from feature file
scenarios("../features/self_healing.feature")


# =============================================================================
# Given
# =============================================================================


@given("the definition source does not exist")
def missing_source(test_context, tmp_path):
    test_context["source"] = tmp_path / "nowhere" / "rituals.json"


@given(parsers.parse('a definition source containing "{content}"'))
def source_with_content(test_context, tmp_path, content: str):
    path = tmp_path / "rituals.json"
    path.write_text(content.replace('\\"', '"'))
    test_context["source"] = path


@given(parsers.parse('a definition source where ritual "{ritual_id}" has no name'))
def source_with_invalid_entry(test_context, tmp_path, ritual_data, ritual_id: str):
    broken = ritual_data(ritual_id)
    del broken["name"]
    path = tmp_path / "rituals.json"
    path.write_text(json.dumps([ritual_data("alpha"), broken]))
    test_context["source"] = path


@given(parsers.parse('a YAML definition source with rituals "{ids}"'))
def yaml_source(test_context, tmp_path, ritual_data, ids: str):
    entries = [ritual_data(rid.strip()) for rid in ids.split(",")]
    path = tmp_path / "rituals.yaml"
    path.write_text(yaml.safe_dump(entries, sort_keys=False))
    test_context["source"] = path


# =============================================================================
# When
# =============================================================================


@when("the catalog is ensured seeded")
def run_ensure_seeded(test_context):
    test_context["error"] = None
    try:
        test_context["seeded"] = ensure_seeded(test_context["store"], test_context["source"])
    except InitError as e:
        test_context["error"] = e


@when("the catalog is seeded twice")
def run_seed_twice(test_context):
    seed(test_context["store"], test_context["source"])
    test_context["written"] = seed(test_context["store"], test_context["source"])


# =============================================================================
# Then
# =============================================================================


@then("seeding happened")
def seeding_happened(test_context):
    assert test_context["error"] is None
    assert test_context["seeded"] is True


@then("seeding did not happen")
def seeding_skipped(test_context):
    assert test_context["error"] is None
    assert test_context["seeded"] is False


@then("initialization fails")
def initialization_fails(test_context):
    assert isinstance(test_context["error"], InitError)


@then("every stored ritual matches its last occurrence in the source")
def matches_last_occurrence(test_context):
    expected = {}
    for entry in test_context["source_entries"]:
        expected[entry["id"]] = entry

    stored = decode_all(test_context["store"].get_all())

    assert test_context["written"] == len(expected)
    assert {r.id: r.model_dump() for r in stored} == expected
