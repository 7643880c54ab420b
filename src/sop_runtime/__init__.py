"""SOP Runtime.

Stateless workflow runtime for standard operating procedures:
- graph validation of SOP definitions
- case creation and precondition-checked transitions with an audit trail
- notification previews and completion-progress estimates
"""

__version__ = "0.1.0"

from sop_runtime.config import RuntimeSettings

__all__ = ["__version__", "RuntimeSettings"]
