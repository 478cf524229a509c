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
Models for Neo4j Labs plugins bundled into the container at start.
"""
from enum import Enum
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator


class PluginKind(str, Enum):
    """
    Known Neo4j Labs plugins, valued by their canonical name.
    """

    APOC = "apoc"
    APOC_CORE = "apoc-core"
    BLOOM = "bloom"
    STREAMS = "streams"
    GRAPH_DATA_SCIENCE = "graph-data-science"
    NEO_SEMANTICS = "n10s"
    CUSTOM = "custom"


class Neo4jLabsPlugin(BaseModel):
    """
    A plugin identifier: one of the known plugins, or a custom plugin
    carrying its literal name.
    """

    model_config = ConfigDict(frozen=True)

    kind: PluginKind
    custom_name: Optional[str] = None

    @model_validator(mode="after")
    def _check_custom_name(self) -> "Neo4jLabsPlugin":
        if self.kind == PluginKind.CUSTOM and self.custom_name is None:
            raise ValueError("A custom plugin needs a name")
        return self

    @classmethod
    def custom(cls, name: str) -> "Neo4jLabsPlugin":
        """Create a plugin that formats as the given literal name."""
        return cls(kind=PluginKind.CUSTOM, custom_name=name)

    @classmethod
    def parse(cls, name: str) -> "Neo4jLabsPlugin":
        """
        Map a canonical name to its known plugin, falling back to a custom one.

        Args:
            name: Plugin name, e.g. 'apoc' or 'graph-data-science'.

        Returns:
            The matching Neo4jLabsPlugin.
        """
        for kind in PluginKind:
            if kind != PluginKind.CUSTOM and kind.value == name:
                return cls(kind=kind)
        return cls.custom(name)

    @property
    def canonical_name(self) -> str:
        """The name passed to the container in NEO4JLABS_PLUGINS."""
        if self.kind == PluginKind.CUSTOM:
            return self.custom_name
        return self.kind.value

    def __str__(self) -> str:
        return self.canonical_name


PluginLike = Union[Neo4jLabsPlugin, str]

APOC = Neo4jLabsPlugin(kind=PluginKind.APOC)
APOC_CORE = Neo4jLabsPlugin(kind=PluginKind.APOC_CORE)
BLOOM = Neo4jLabsPlugin(kind=PluginKind.BLOOM)
STREAMS = Neo4jLabsPlugin(kind=PluginKind.STREAMS)
GRAPH_DATA_SCIENCE = Neo4jLabsPlugin(kind=PluginKind.GRAPH_DATA_SCIENCE)
NEO_SEMANTICS = Neo4jLabsPlugin(kind=PluginKind.NEO_SEMANTICS)


def to_plugin(plugin: PluginLike) -> Neo4jLabsPlugin:
    """Accept either a plugin model or its name."""
    if isinstance(plugin, Neo4jLabsPlugin):
        return plugin
    return Neo4jLabsPlugin.parse(plugin)


def canonical_names(plugins: Iterable[Neo4jLabsPlugin]) -> List[str]:
    """
    Sorted canonical names with duplicates removed.

    Duplicates are decided by canonical name, so custom plugins whose name
    equals a known plugin collapse into it.
    """
    return sorted({plugin.canonical_name for plugin in plugins})
