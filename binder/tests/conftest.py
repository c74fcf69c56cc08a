import pytest

from binder.src.binder.classifier import BindingClassifier
from go_samples import PLAYER_GO


@pytest.fixture(scope="session")
def classifier() -> BindingClassifier:
    return BindingClassifier()


@pytest.fixture
def player_unit(classifier):
    return classifier.classify_source(PLAYER_GO, "player.go")
