# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Builder for Neo4j test container images.

Typical use:

    image = Neo4jBuilder.from_version("5.15").with_plugin([APOC]).build()
"""
import logging
import os
from typing import Iterable, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..MODELS.neo4j_image import Neo4jImage
from ..MODELS.plugin import Neo4jLabsPlugin, PluginLike, canonical_names, to_plugin
from ..UTILS.resolution import resolve_setting
from .env_derivation import derive_env_vars

logger = logging.getLogger(__name__)

USER_VAR = "NEO4J_TEST_USER"
PASS_VAR = "NEO4J_TEST_PASS"
VERSION_VAR = "NEO4J_VERSION_TAG"

DEFAULT_USER = "neo4j"
DEFAULT_PASS = "neo"
DEFAULT_VERSION_TAG = "5"


class Neo4jBuilder(BaseModel):
    """
    Accumulates the configuration of a Neo4j image.

    Builders are immutable: with_plugin() returns a new builder and leaves
    the original untouched. build() finalizes into a Neo4jImage.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    user: str
    password: str
    plugins: Tuple[Neo4jLabsPlugin, ...] = ()

    @classmethod
    def create(
        cls,
        version: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        lookup: Optional[Mapping[str, str]] = None,
    ) -> "Neo4jBuilder":
        """
        Resolves every field as explicit value > override variable > fallback.

        Args:
            version: Image tag, e.g. '5' or '4.4'.
            user: Database user.
            password: Database password.
            lookup: Override variables; the process environment when omitted.

        Returns:
            A builder without plugins.
        """
        if lookup is None:
            lookup = os.environ
        return cls(
            version=resolve_setting(version, VERSION_VAR, DEFAULT_VERSION_TAG, lookup),
            user=resolve_setting(user, USER_VAR, DEFAULT_USER, lookup),
            password=resolve_setting(password, PASS_VAR, DEFAULT_PASS, lookup),
        )

    @classmethod
    def from_env(cls, lookup: Optional[Mapping[str, str]] = None) -> "Neo4jBuilder":
        """Neo4j 5 with the default user and password, unless overridden."""
        return cls.create(lookup=lookup)

    @classmethod
    def from_version(
        cls, version: str, lookup: Optional[Mapping[str, str]] = None
    ) -> "Neo4jBuilder":
        """The given version with the default user and password."""
        return cls.create(version=version, lookup=lookup)

    @classmethod
    def from_auth_and_version(cls, version: str, user: str, password: str) -> "Neo4jBuilder":
        return cls.create(version=version, user=user, password=password)

    def with_plugin(self, plugins: Union[PluginLike, Iterable[PluginLike]]) -> "Neo4jBuilder":
        """
        Attaches plugins, given as models or names.

        Repeats are kept here and collapsed by build().

        Args:
            plugins: Plugins to add to those already attached; a single
                plugin or name is also accepted.

        Returns:
            A new builder.
        """
        if isinstance(plugins, (str, Neo4jLabsPlugin)):
            plugins = (plugins,)
        added = tuple(to_plugin(plugin) for plugin in plugins)
        return self.model_copy(update={"plugins": self.plugins + added})

    def build(self) -> Neo4jImage:
        """
        Finalizes the configuration into an image descriptor.

        Returns:
            The Neo4jImage carrying the derived environment.
        """
        env_vars = derive_env_vars(self.user, self.password, self.plugins)
        image = Neo4jImage(
            version=self.version,
            user=self.user,
            password=self.password,
            plugins=tuple(canonical_names(self.plugins)),
            environment=tuple(env_vars.items()),
        )
        logger.debug(
            "Built %s with plugins %s and environment keys %s",
            image.image,
            list(image.plugins),
            sorted(env_vars),
        )
        return image
