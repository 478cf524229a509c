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
Connection URIs for a running Neo4j container.
"""
from typing import Optional, Protocol

from ..MODELS.neo4j_image import BOLT_PORT, HTTP_PORT
from .port_bindings import IpFamily

LOOPBACK = {
    IpFamily.IPV4: "127.0.0.1",
    IpFamily.IPV6: "[::1]",
}


class PortMapper(Protocol):
    """
    A running container that can report the host port for a container port.
    """

    def map_to_host_port_ipv4(self, port: int) -> Optional[int]:
        ...

    def map_to_host_port_ipv6(self, port: int) -> Optional[int]:
        ...


def mapped_port(container: PortMapper, port: int, family: IpFamily) -> int:
    """
    Looks up the host port for a container port.

    Args:
        container: The running container.
        port: Port inside the container.
        family: Host address family.

    Returns:
        The host port.

    Raises:
        RuntimeError: If the port is not published. The Neo4j image always
            exposes 7474 and 7687, so this means the container launch is broken.
    """
    if family == IpFamily.IPV6:
        host_port = container.map_to_host_port_ipv6(port)
    else:
        host_port = container.map_to_host_port_ipv4(port)
    if host_port is None:
        raise RuntimeError(
            f"Container port {port} has no {family.value} host mapping; "
            f"the Neo4j image exposes {HTTP_PORT} and {BOLT_PORT} by default"
        )
    return host_port


def _uri(scheme: str, container: PortMapper, port: int, family: IpFamily) -> str:
    return f"{scheme}://{LOOPBACK[family]}:{mapped_port(container, port, family)}"


def bolt_uri_ipv4(container: PortMapper) -> str:
    """bolt://127.0.0.1:<port>"""
    return _uri("bolt", container, BOLT_PORT, IpFamily.IPV4)


def bolt_uri_ipv6(container: PortMapper) -> str:
    """bolt://[::1]:<port>"""
    return _uri("bolt", container, BOLT_PORT, IpFamily.IPV6)


def http_uri_ipv4(container: PortMapper) -> str:
    return _uri("http", container, HTTP_PORT, IpFamily.IPV4)


def http_uri_ipv6(container: PortMapper) -> str:
    return _uri("http", container, HTTP_PORT, IpFamily.IPV6)
