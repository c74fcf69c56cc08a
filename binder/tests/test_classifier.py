import pytest

from binder.src.binder.config import BinderConfig
from binder.src.binder.classifier import BindingClassifier
from binder.src.binder.errors import SourceParseError, UnknownTypeError
from go_samples import BROKEN_GO, GENERIC_GO, LATE_TYPE_GO, ODD_PARAMS_GO, PLAYER_GO


def _names(methods):
    return [m.name for m in methods]


def test_player_scenario(player_unit):
    player = player_unit.bindings.lookup("Player")
    assert _names(player.class_methods) == ["New"]
    assert _names(player.instance_methods) == ["Attack", "SetHealth"]


def test_package_and_imports(player_unit):
    assert player_unit.package == "player"
    assert player_unit.imports == {"vm": "github.com/goby-lang/goby/vm"}
    assert player_unit.path == "player.go"


def test_anonymous_receiver_is_class_method(player_unit):
    new = player_unit.bindings.lookup("Player").class_methods[0]
    assert new.is_class_method
    assert new.receiver_name is None
    assert new.receiver_type == "Player"


def test_named_receiver_is_instance_method(player_unit):
    attack = player_unit.bindings.lookup("Player").instance_methods[0]
    assert not attack.is_class_method
    assert attack.receiver_name == "p"
    assert attack.receiver_type == "Player"


def test_non_marker_results_are_ignored(player_unit):
    recorded = [m.name for b in player_unit.bindings for m in b.methods()]
    # string result, two results, and a plain function
    assert "name" not in recorded
    assert "pair" not in recorded
    assert "helper" not in recorded


def test_params_keep_order_and_pointers(player_unit):
    set_health = player_unit.bindings.lookup("Player").instance_methods[1]
    assert [(p.name, p.kind) for p in set_health.params] == [
        ("t", "*vm.Thread"),
        ("hp", "*vm.IntegerObject"),
        ("boost", "Object"),
    ]
    assert set_health.arity == 2


def test_type_declaration_alone_gives_empty_binding(classifier):
    unit = classifier.classify_source(LATE_TYPE_GO)
    empty = unit.bindings.lookup("Empty")
    assert empty.class_methods == []
    assert empty.instance_methods == []


def test_type_declaration_merges_into_earlier_methods(classifier):
    unit = classifier.classify_source(LATE_TYPE_GO)
    enemy = unit.bindings.lookup("Enemy")
    assert _names(enemy.class_methods) == ["Spawn"]
    assert _names(enemy.instance_methods) == ["Hit"]
    assert unit.bindings.names() == ["Enemy", "Empty"]


def test_type_aliases_are_registered(player_unit):
    assert "Object" in player_unit.bindings


def test_unresolved_and_grouped_params(classifier):
    unit = classifier.classify_source(ODD_PARAMS_GO)
    bag = unit.bindings.lookup("Bag")
    fill, spread, pair = bag.instance_methods
    assert fill.params[1].kind is None
    assert fill.params[1].expr == "[]Object"
    assert spread.params[1].variadic
    assert [p.name for p in pair.params] == ["t", "x", "y"]
    assert bag.class_methods[0].params == []


def test_unknown_type_lists_known_names(player_unit):
    with pytest.raises(UnknownTypeError) as exc:
        player_unit.bindings.lookup("Monster")
    assert exc.value.known == ["Object", "Player"]


def test_syntax_errors_fail_the_run(classifier):
    with pytest.raises(SourceParseError, match=r"broken.go:\d+:\d+: syntax error"):
        classifier.classify_source(BROKEN_GO, "broken.go")


def test_marker_type_is_configurable():
    classifier = BindingClassifier(BinderConfig(marker_type="error"))
    unit = classifier.classify_source(PLAYER_GO)
    assert unit.bindings.lookup("Player").instance_methods == []


def test_each_run_starts_clean(classifier):
    first = classifier.classify_source(PLAYER_GO)
    second = classifier.classify_source(PLAYER_GO)
    assert first.bindings is not second.bindings
    assert len(second.bindings.lookup("Player").instance_methods) == 2


def test_generic_receiver_is_skipped_with_warning(classifier, caplog):
    unit = classifier.classify_source(GENERIC_GO, "player.go")
    box = unit.bindings.lookup("Box")
    assert list(box.methods()) == []
    assert _names(unit.bindings.lookup("Player").instance_methods) == ["Attack", "SetHealth"]
    assert "skipping method Get" in caplog.text
