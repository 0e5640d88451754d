import os
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for module imports (motion, app)
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless pygame: visuals only ever touch off-screen surfaces
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from motion.services import build_context  # noqa: E402


@pytest.fixture
def ctx():
    """Seeded context so sampling is reproducible per test."""
    return build_context(seed=1234)
