"""
Risk Advisor: Core Type Definitions

This module defines common type aliases shared across the Risk Advisor
codebase. It exists to centralise frequently used type definitions and
avoid circular imports between higher-level modules.

Thread safety: Thread-safe (no mutable global state)

Author: Risk Advisor Team
Created: 2025-12-02
Last Modified: 2025-12-04
Status: Development
Version: v0.1.0
"""

# ============================================================================
# Imports
# ============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, TypeAlias

# ============================================================================
# Type Aliases
# ============================================================================

# Plain mapping accepted by ``from_mapping`` constructors (parsed JSON).
RawRecord: TypeAlias = Mapping[str, Any]

# Zero-argument callable returning the current time; injected so that
# alert timestamps are reproducible in tests.
Clock: TypeAlias = Callable[[], datetime]
