from roster_ledger.roster.model import NON_NUMERIC_RANK, Entity, normalize_name, roll_sort_key, sort_roster


def test_roll_labels_sort_by_numeric_prefix():
    entities = [Entity(str(i), f"N{i}", label) for i, label in enumerate(["10", "2", "9a", "1"])]

    assert [e.roll_label for e in sort_roster(entities)] == ["1", "2", "9a", "10"]


def test_labels_without_digits_sort_last_then_lexicographically():
    entities = [Entity(str(i), f"N{i}", label) for i, label in enumerate(["B", "3", "A", "R-12"])]

    assert [e.roll_label for e in sort_roster(entities)] == ["3", "R-12", "A", "B"]
    assert roll_sort_key("none")[0] == NON_NUMERIC_RANK


def test_same_numeric_prefix_breaks_ties_on_raw_label():
    assert sorted(["9b", "9", "9a"], key=roll_sort_key) == ["9", "9a", "9b"]


def test_normalize_name_trims_and_casefolds():
    assert normalize_name("  Straße ") == normalize_name("STRASSE")


def test_entity_reads_legacy_field_names():
    entity = Entity.from_dict({"id": "7", "name": "Ann", "rollNumber": "12", "photo": "data:image/png;base64,xx"})

    assert entity == Entity("7", "Ann", "12", "data:image/png;base64,xx")
    assert entity.to_dict() == {"id": "7", "name": "Ann", "rollLabel": "12", "photoRef": "data:image/png;base64,xx"}
