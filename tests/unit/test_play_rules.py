"""Tests for rule explanations."""

from fritz.board.shapes import AnimalKind
from fritz.play.rules import RuleExplainer


class TestRuleExplainer:
    def test_rules_mention_every_animal(self):
        text = RuleExplainer().explain_rules()
        assert "28 animal tiles" in text
        for kind in AnimalKind:
            assert kind.value.title() in text

    def test_describe_kind(self):
        line = RuleExplainer().describe_kind(AnimalKind.RABBIT)
        assert "Rabbit: x4, 1 tile, 1 rotation" in line

    def test_draw_shapes(self):
        drawing = RuleExplainer().draw_shapes(AnimalKind.DEER)
        assert drawing.splitlines() == ["##   #", "     #"]
