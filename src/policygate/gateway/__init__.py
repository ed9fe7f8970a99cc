"""Gateway layer — classified-outcome wrappers over an administrative backend.

The gateway may import from the domain layer only.
It must never import from commands, output, or backends.
"""

from policygate.gateway.errors import ErrorKind, GatewayError
from policygate.gateway.policy import PolicyGateway
from policygate.gateway.result import Outcome

__all__ = ["ErrorKind", "GatewayError", "Outcome", "PolicyGateway"]
