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
Derivation of the Neo4j container environment from a builder's configuration.
"""
from typing import Dict, Iterable

from ..MODELS.plugin import Neo4jLabsPlugin, canonical_names

AUTH_VAR = "NEO4J_AUTH"
PLUGINS_VAR = "NEO4JLABS_PLUGINS"
MIN_PASSWORD_LENGTH_VAR = "NEO4J_dbms_security_auth__minimum__password__length"

# Neo4j rejects passwords shorter than this unless the minimum is lowered.
DEFAULT_MIN_PASSWORD_LENGTH = 8


def auth_env(user: str, password: str) -> Dict[str, str]:
    """NEO4J_AUTH is always set, as '<user>/<password>'."""
    return {AUTH_VAR: f"{user}/{password}"}


def plugins_env(plugins: Iterable[Neo4jLabsPlugin]) -> Dict[str, str]:
    """
    Formats the plugins as a JSON-shaped array of sorted, unique names.

    Args:
        plugins: Attached plugins, possibly repeated.

    Returns:
        {'NEO4JLABS_PLUGINS': '["apoc","bloom"]'}, or an empty dict when no
        plugins are attached.
    """
    names = canonical_names(plugins)
    if not names:
        return {}
    return {PLUGINS_VAR: "[" + ",".join(f'"{name}"' for name in names) + "]"}


def password_length_env(password: str) -> Dict[str, str]:
    """Lowers the server's minimum password length to fit short passwords."""
    if len(password) < DEFAULT_MIN_PASSWORD_LENGTH:
        return {MIN_PASSWORD_LENGTH_VAR: str(len(password))}
    return {}


def derive_env_vars(user: str,
                    password: str,
                    plugins: Iterable[Neo4jLabsPlugin]) -> Dict[str, str]:
    """
    Builds the full container environment.

    Entries from earlier derivations are never overridden by later ones.

    Args:
        user: Database user.
        password: Database password.
        plugins: Attached plugins.

    Returns:
        Mapping from variable name to value.
    """
    env: Dict[str, str] = {}
    for derived in (auth_env(user, password),
                    plugins_env(plugins),
                    password_length_env(password)):
        for key, value in derived.items():
            env.setdefault(key, value)
    return env
