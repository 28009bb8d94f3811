"""
Root-level pytest configuration for the Bulwark repository.

Keeps the library tests (packages/core/tests/) and the service tests
(services/edge/tests/) from colliding as a single ``tests`` namespace
package during collection, and makes ``bulwark_core`` importable from a
plain checkout.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure packages/core is importable
root = Path(__file__).parent
core_path = root / "packages" / "core"
if str(core_path) not in sys.path:
    sys.path.insert(0, str(core_path))
