import random

from core.domain.models import (
    CountryRecord,
    DeleteRequest,
    EditSession,
    InsertRequest,
    OutcomeKind,
    Roster,
    UpdateRequest,
)
from core.services.constraint_engine import RosterLimits, apply, find_violations

JAPAN = CountryRecord(name="Japan", continent="Asia", code="JPN")


def test_insert_into_empty_roster():
    result = apply(Roster(), InsertRequest(raw_name="Japan"), JAPAN)

    assert result.outcome.kind is OutcomeKind.ACCEPTED_INSERTED
    assert result.outcome.country == JAPAN
    assert result.roster.codes == ["JPN"]


def test_fifth_country_of_a_continent_is_rejected(asia_full_roster, country):
    thailand = country("Asia", 4)

    result = apply(asia_full_roster, InsertRequest(raw_name="Thailand"), thailand)

    assert result.outcome.kind is OutcomeKind.REJECTED_CONTINENT_FULL
    assert result.outcome.continent == "Asia"
    assert result.outcome.limit == 4
    assert not result.outcome.editing
    assert result.roster is asia_full_roster


def test_update_within_full_continent_excludes_edited_entry(asia_full_roster):
    japon = CountryRecord(name="Japón", continent="Asia", code="JPN")
    session = EditSession.editing("JPN")

    result = apply(
        asia_full_roster,
        UpdateRequest(raw_name="Japón", target_code="JPN"),
        japon,
        session,
    )

    assert result.outcome.kind is OutcomeKind.ACCEPTED_UPDATED
    assert result.roster.count_continent("Asia") == 4
    assert result.roster.find("JPN").name == "Japón"
    assert result.roster.codes == asia_full_roster.codes
    assert result.session == EditSession.idle()


def test_seventeenth_country_is_rejected(full_roster, country):
    australia = country("Oceanía", 0)

    result = apply(full_roster, InsertRequest(raw_name="Australia"), australia)

    assert result.outcome.kind is OutcomeKind.REJECTED_ROSTER_FULL
    assert result.outcome.limit == 16
    assert result.roster is full_roster


def test_roster_full_wins_over_duplicate(full_roster):
    existing = full_roster.countries[0]

    result = apply(full_roster, InsertRequest(raw_name=existing.name), existing)

    assert result.outcome.kind is OutcomeKind.REJECTED_ROSTER_FULL


def test_empty_name_is_rejected_before_lookup_result():
    result = apply(Roster(), InsertRequest(raw_name="   "), JAPAN)

    assert result.outcome.kind is OutcomeKind.REJECTED_EMPTY_INPUT
    assert len(result.roster) == 0


def test_unresolved_name_is_rejected():
    roster = Roster()

    result = apply(roster, InsertRequest(raw_name="Atlantis"), None)

    assert result.outcome.kind is OutcomeKind.REJECTED_NOT_FOUND
    assert result.roster is roster


def test_duplicate_insert_is_rejected():
    roster = Roster(countries=(JAPAN,))

    result = apply(roster, InsertRequest(raw_name="Nippon"), JAPAN)

    assert result.outcome.kind is OutcomeKind.REJECTED_DUPLICATE_COUNTRY
    assert not result.outcome.editing
    assert result.roster is roster


def test_duplicate_checked_before_continent(asia_full_roster):
    result = apply(asia_full_roster, InsertRequest(raw_name="Japan"), JAPAN)

    assert result.outcome.kind is OutcomeKind.REJECTED_DUPLICATE_COUNTRY


def test_update_to_country_registered_elsewhere_is_rejected(asia_full_roster, country):
    china = country("Asia", 1)

    result = apply(
        asia_full_roster,
        UpdateRequest(raw_name="China", target_code="JPN"),
        china,
        EditSession.editing("JPN"),
    )

    assert result.outcome.kind is OutcomeKind.REJECTED_DUPLICATE_COUNTRY
    assert result.outcome.editing
    assert result.roster is asia_full_roster
    assert result.session == EditSession.editing("JPN")


def test_update_into_full_continent_is_rejected(asia_full_roster, country):
    # Asia ya tiene 4: mover FRA a Asia la desborda.
    thailand = country("Asia", 4)

    result = apply(
        asia_full_roster,
        UpdateRequest(raw_name="Thailand", target_code="FRA"),
        thailand,
        EditSession.editing("FRA"),
    )

    assert result.outcome.kind is OutcomeKind.REJECTED_CONTINENT_FULL
    assert result.outcome.continent == "Asia"
    assert result.outcome.editing
    assert result.roster is asia_full_roster


def test_update_to_another_continent_keeps_position(asia_full_roster, country):
    brazil = country("América", 0)

    result = apply(
        asia_full_roster,
        UpdateRequest(raw_name="Brazil", target_code="KOR"),
        brazil,
    )

    assert result.outcome.kind is OutcomeKind.ACCEPTED_UPDATED
    assert result.roster.codes == ["JPN", "FRA", "CHN", "BRA", "ESP", "IND"]


def test_update_allowed_when_roster_is_full(full_roster, country):
    australia = country("Oceanía", 0)
    target = full_roster.countries[5].code

    result = apply(full_roster, UpdateRequest(raw_name="Australia", target_code=target), australia)

    assert result.outcome.kind is OutcomeKind.ACCEPTED_UPDATED
    assert len(result.roster) == 16
    assert result.roster.countries[5] == australia


def test_update_with_missing_target_is_a_noop_failure():
    roster = Roster(countries=(JAPAN,))

    result = apply(
        roster,
        UpdateRequest(raw_name="Spain", target_code="FRA"),
        CountryRecord(name="Spain", continent="Europa", code="ESP"),
        EditSession.editing("FRA"),
    )

    assert result.outcome.kind is OutcomeKind.OPERATION_FAILED
    assert result.roster is roster
    assert not result.session.active


def test_update_rejections_still_check_input_first():
    roster = Roster(countries=(JAPAN,))

    empty = apply(roster, UpdateRequest(raw_name="", target_code="JPN"), JAPAN)
    missing = apply(roster, UpdateRequest(raw_name="Japn", target_code="JPN"), None)

    assert empty.outcome.kind is OutcomeKind.REJECTED_EMPTY_INPUT
    assert missing.outcome.kind is OutcomeKind.REJECTED_NOT_FOUND


def test_delete_removes_and_keeps_order(asia_full_roster):
    result = apply(asia_full_roster, DeleteRequest(target_code="CHN"))

    assert result.outcome.kind is OutcomeKind.ACCEPTED_DELETED
    assert result.roster.codes == ["JPN", "FRA", "KOR", "ESP", "IND"]


def test_delete_missing_code_is_noop(asia_full_roster):
    result = apply(asia_full_roster, DeleteRequest(target_code="ZZZ"))

    assert result.outcome.kind is OutcomeKind.NO_CHANGE
    assert result.roster is asia_full_roster


def test_delete_of_edited_country_clears_session(asia_full_roster):
    result = apply(asia_full_roster, DeleteRequest(target_code="JPN"), None, EditSession.editing("JPN"))

    assert not result.session.active


def test_unrecognized_continent_counts_on_its_own():
    limits = RosterLimits(max_countries=16, max_per_continent=1)
    roster = Roster(countries=(CountryRecord(name="Bouvet Island", continent="Antarctic", code="BVT"),))

    result = apply(
        roster,
        InsertRequest(raw_name="Heard Island"),
        CountryRecord(name="Heard Island", continent="Antarctic", code="HMD"),
        limits=limits,
    )

    assert result.outcome.kind is OutcomeKind.REJECTED_CONTINENT_FULL
    assert result.outcome.continent == "Antarctic"


def test_custom_limits():
    limits = RosterLimits(max_countries=1, max_per_continent=4)
    roster = Roster(countries=(JAPAN,))

    result = apply(
        roster,
        InsertRequest(raw_name="Spain"),
        CountryRecord(name="Spain", continent="Europa", code="ESP"),
        limits=limits,
    )

    assert result.outcome.kind is OutcomeKind.REJECTED_ROSTER_FULL
    assert result.outcome.limit == 1


def test_random_operations_preserve_invariants(country_pool):
    rng = random.Random(20240611)
    pool = country_pool
    roster = Roster()
    session = EditSession.idle()

    for _ in range(500):
        candidate = rng.choice(pool + [None])
        op = rng.random()
        if op < 0.55:
            request = InsertRequest(raw_name=candidate.name if candidate else "nowhere")
        elif op < 0.85 and roster.countries:
            target = rng.choice(roster.countries).code
            session = EditSession.editing(target)
            request = session.request_for(candidate.name if candidate else "nowhere")
        else:
            codes = roster.codes or ["ZZZ"]
            request = DeleteRequest(target_code=rng.choice(codes + ["ZZZ"]))

        before = roster
        result = apply(roster, request, candidate, session)
        roster, session = result.roster, result.session

        if not result.outcome.accepted:
            assert roster is before
        assert find_violations(roster) == []


def test_find_violations_reports_each_problem():
    roster = Roster(countries=(JAPAN, JAPAN))

    problems = find_violations(roster, RosterLimits(max_countries=1, max_per_continent=1))

    assert problems == ["size 2 > 1", "duplicate code JPN", "Asia: 2 > 1"]
