"""
Models representing a finalized Neo4j container image, as handed to the orchestration layer.
"""
from typing import Dict, Tuple
from pydantic import BaseModel, ConfigDict

from .wait_condition import WaitFor

IMAGE_NAME = "neo4j"
HTTP_PORT = 7474
BOLT_PORT = 7687

READY_CONDITIONS: Tuple[WaitFor, ...] = (
    WaitFor.message_on_stdout("Bolt enabled on"),
    WaitFor.message_on_stdout("Started."),
)


class Neo4jImage(BaseModel):
    """
    The read-only image descriptor produced by Neo4jBuilder.build().

    Carries the configuration through unchanged and exposes everything the
    orchestration layer needs: name, tag, environment and readiness markers.
    """
    model_config = ConfigDict(frozen=True)

    version: str
    user: str
    password: str
    plugins: Tuple[str, ...] = ()

    # Stored as pairs so the descriptor stays immutable; see env_vars.
    environment: Tuple[Tuple[str, str], ...] = ()

    @property
    def name(self) -> str:
        return IMAGE_NAME

    @property
    def tag(self) -> str:
        return self.version

    @property
    def image(self) -> str:
        """Full image reference, e.g. 'neo4j:5'."""
        return f"{self.name}:{self.tag}"

    @property
    def env_vars(self) -> Dict[str, str]:
        """A fresh copy of the derived container environment."""
        return dict(self.environment)

    @property
    def ready_conditions(self) -> Tuple[WaitFor, ...]:
        return READY_CONDITIONS

    @property
    def exposed_ports(self) -> Tuple[int, ...]:
        return (HTTP_PORT, BOLT_PORT)

    @property
    def auth(self) -> Tuple[str, str]:
        """Credentials in the (user, password) form drivers expect."""
        return (self.user, self.password)
