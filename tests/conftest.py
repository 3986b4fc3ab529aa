"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `insight_core` en ajoutant la racine du projet
au sys.path, et fournit les fixtures communes (profil, cache, horloge figée).
"""

import os
import sys
from datetime import date

import pytest

# Ensure project root is on sys.path so that
# imports like `from insight_core...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from insight_core.domain.entities import Locale, UserProfile  # noqa: E402
from insight_core.infra.cache_store import InMemoryInsightCache  # noqa: E402
from tests.fakes import FROZEN_NOW  # noqa: E402


@pytest.fixture
def profile() -> UserProfile:
    """Profil de référence: Gémeaux (Air), Cheval."""
    return UserProfile(id="user-1", name="Ada", birth_date=date(1990, 6, 1), locale=Locale.EN)


@pytest.fixture
def cache() -> InMemoryInsightCache:
    return InMemoryInsightCache()


@pytest.fixture
def clock():
    """Horloge figée injectée dans l'orchestrateur."""
    return lambda: FROZEN_NOW
