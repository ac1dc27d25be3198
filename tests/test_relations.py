"""Tests for relation lists with in-flight removal."""

from citadel_crm.actions.results import ActionResult
from citadel_crm.editing.relations import RelationList
from citadel_crm.models import Opportunity
from citadel_crm.models.envelope import ErrorKind


def _opps() -> list[Opportunity]:
    return [Opportunity(id=10, uuid="o-10", name="A"), Opportunity(id=11, uuid="o-11", name="B")]


class TestRelationListAdd:
    def test_add_dedupes_by_id(self) -> None:
        relations = RelationList(_opps())
        assert relations.add(Opportunity(id=10, uuid="other", name="A again")) is False
        assert relations.add(Opportunity(id=12, name="C")) is True
        assert relations.ids() == [10, 11, 12]

    def test_contains_and_find(self) -> None:
        relations = RelationList(_opps())
        assert 11 in relations
        assert 99 not in relations
        assert relations.find(11).name == "B"
        assert relations.find(99) is None
        assert len(relations) == 2


class TestRelationListRemove:
    def test_removed_after_confirmation(self) -> None:
        relations = RelationList(_opps())
        seen = []

        def call(item: Opportunity) -> ActionResult:
            seen.append((item.id, relations.removing_id, item.id in relations))
            return ActionResult(value=True)

        assert relations.remove(10, call) is True
        assert seen == [(10, 10, True)]
        assert relations.ids() == [11]
        assert relations.removing_id is None

    def test_failed_removal_keeps_item(self) -> None:
        relations = RelationList(_opps())
        assert relations.remove(10, lambda item: ActionResult.fail(ErrorKind.REMOTE, 500)) is False
        assert relations.ids() == [10, 11]
        assert relations.removing_id is None

    def test_unknown_id(self) -> None:
        relations = RelationList(_opps())
        calls = []
        assert relations.remove(99, lambda item: calls.append(item)) is False
        assert calls == []

    def test_custom_key(self) -> None:
        relations = RelationList(_opps(), key=lambda o: o.uuid)
        assert "o-11" in relations
        assert relations.remove("o-11", lambda item: ActionResult(value=True)) is True
        assert relations.ids() == ["o-10"]
