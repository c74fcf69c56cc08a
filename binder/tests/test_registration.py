import pytest

from binder.src.binder.config import BinderConfig
from binder.src.binder.errors import GenerationError
from binder.src.binder.gocode import Imports
from binder.src.binder.registration import external_name, mapping, split_camel_case
from go_samples import COLLIDING_GO


@pytest.mark.parametrize("identifier, expected", [
    ("SetHealth", "set_health"),
    ("HP", "hp"),
    ("New", "new"),
    ("HTTPServer", "http_server"),
    ("Level2Boss", "level_2_boss"),
    ("getID", "get_id"),
])
def test_external_name(identifier, expected):
    assert external_name(identifier) == expected


def test_split_keeps_acronyms_together():
    assert split_camel_case("PDFLoader") == ["PDF", "Loader"]
    assert split_camel_case("lowercase") == ["lowercase"]
    assert split_camel_case("") == []


def test_init_block_registers_both_tables(player_unit):
    player = player_unit.bindings.lookup("Player")
    init = mapping(player, "player", BinderConfig())
    text = init.render(Imports())
    assert text.startswith("func init() {\n\tvm.RegisterExternalClass(\"player\", vm.ExternalClass(\n")
    assert '\t\t"Player",\n' in text
    assert '\t\t"player.gb",\n' in text
    assert '\t\t\t"new": bindingPlayerNew,\n' in text
    assert '\t\t\t"attack":     bindingPlayerAttack,\n' in text
    assert '\t\t\t"set_health": bindingPlayerSetHealth,\n' in text
    # class table comes before the instance table
    assert text.index('"new"') < text.index('"attack"')


def test_empty_tables_render_as_empty_maps(classifier):
    unit = classifier.classify_source("package game\n\ntype Empty struct{}\n")
    text = mapping(unit.bindings.lookup("Empty"), "game", BinderConfig()).render(Imports())
    assert text.count("map[string]vm.Method{}") == 2


def test_colliding_external_names_are_rejected(classifier):
    unit = classifier.classify_source(COLLIDING_GO)
    with pytest.raises(GenerationError, match="set_hp"):
        mapping(unit.bindings.lookup("Door"), "game", BinderConfig())
