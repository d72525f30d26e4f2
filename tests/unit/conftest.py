"""Unit test configuration.

Unit tests are fast and isolated - remote sites are always mocked.
"""

import pytest


pytestmark = pytest.mark.unit
