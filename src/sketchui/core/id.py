"""ID Generation System.

ULID-based identifiers for documents, nodes, sketches, sessions and actions.

Features:
- ULIDs: Lexicographically sortable, timestamp-based
- Type-safe: NewType wrappers for different ID categories
- Prefixed: Type-specific prefixes for debugging (node_*, sketch_*, etc.)
"""

import time
from typing import NewType
from ulid import ULID

# ============================================================================
# Type-Safe ID Wrappers
# ============================================================================

SchemaID = NewType("SchemaID", str)
"""UI document identifier"""

NodeID = NewType("NodeID", str)
"""UI tree node identifier"""

SketchID = NewType("SketchID", str)
"""Annotation identifier"""

SessionID = NewType("SessionID", str)
"""Sketch session identifier"""

ActionID = NewType("ActionID", str)
"""Planned action identifier"""

ComponentID = NewType("ComponentID", str)
"""Selected component record identifier"""

BatchID = NewType("BatchID", str)
"""Orchestrator batch identifier"""

# ============================================================================
# ID Prefixes (for debugging and type identification)
# ============================================================================


class Prefix:
    """ID prefix constants."""

    SCHEMA = "schema"
    NODE = "node"
    SKETCH = "sketch"
    SESSION = "session"
    ACTION = "action"
    COMPONENT = "component"
    BATCH = "batch"


# ============================================================================
# ULID Generator
# ============================================================================


class Generator:
    """ULID generator."""

    def generate(self) -> str:
        """Generate a new ULID."""
        return str(ULID())

    def generate_with_prefix(self, prefix: str) -> str:
        """Generate ULID with type prefix."""
        return f"{prefix}_{self.generate()}"


_generator = Generator()

# ============================================================================
# Typed ID Generators
# ============================================================================


def new_schema_id() -> SchemaID:
    """Generate new document ID."""
    return SchemaID(_generator.generate_with_prefix(Prefix.SCHEMA))


def new_node_id() -> NodeID:
    """Generate new node ID."""
    return NodeID(_generator.generate_with_prefix(Prefix.NODE))


def new_sketch_id() -> SketchID:
    """Generate new sketch ID."""
    return SketchID(_generator.generate_with_prefix(Prefix.SKETCH))


def new_session_id() -> SessionID:
    """Generate new session ID."""
    return SessionID(_generator.generate_with_prefix(Prefix.SESSION))


def new_action_id() -> ActionID:
    """Generate new action ID."""
    return ActionID(_generator.generate_with_prefix(Prefix.ACTION))


def new_component_id() -> ComponentID:
    """Generate new component record ID."""
    return ComponentID(_generator.generate_with_prefix(Prefix.COMPONENT))


def new_batch_id() -> BatchID:
    """Generate new batch ID."""
    return BatchID(_generator.generate_with_prefix(Prefix.BATCH))


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)
