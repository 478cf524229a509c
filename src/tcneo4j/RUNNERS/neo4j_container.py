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
Runs a Neo4jImage through testcontainers.
"""
import logging
from typing import Optional, Tuple

from testcontainers.core.container import DockerContainer
from testcontainers.core.waiting_utils import wait_for_logs

from ..MODELS.neo4j_image import Neo4jImage
from . import connection_uris
from .port_bindings import IpFamily, host_port_for
from .readiness import ready_predicate

logger = logging.getLogger(__name__)


class Neo4jLabsContainer(DockerContainer):
    """
    A DockerContainer configured from a Neo4jImage.

    Injects the derived environment, exposes the HTTP and Bolt ports and,
    on start(), waits for the image's readiness markers.
    """

    def __init__(
        self,
        image: Neo4jImage,
        startup_timeout: float = 120.0,
        poll_interval: float = 0.5,
        **kwargs,
    ):
        """
        Initializes the container.

        Args:
            image: Descriptor produced by Neo4jBuilder.build().
            startup_timeout: Seconds to wait for the readiness markers.
            poll_interval: Seconds between log polls.
            **kwargs: Passed through to DockerContainer.
        """
        super().__init__(image.image, **kwargs)
        self.image_descriptor = image
        self.startup_timeout = startup_timeout
        self.poll_interval = poll_interval

        for key, value in image.env_vars.items():
            self.with_env(key, value)
        self.with_exposed_ports(*image.exposed_ports)

    def start(self) -> "Neo4jLabsContainer":
        logger.info("Starting %s", self.image_descriptor.image)
        super().start()
        try:
            wait_for_logs(
                self,
                ready_predicate(self.image_descriptor.ready_conditions),
                timeout=self.startup_timeout,
                interval=self.poll_interval,
            )
        except Exception:
            logger.error("%s did not become ready, stopping it", self.image_descriptor.image)
            self.stop()
            raise
        logger.info("%s is ready", self.image_descriptor.image)
        return self

    def _host_port(self, port: int, family: IpFamily) -> Optional[int]:
        wrapped = self.get_wrapped_container()
        if wrapped is None:
            return None
        wrapped.reload()
        bindings = wrapped.attrs.get("NetworkSettings", {}).get("Ports")
        return host_port_for(bindings, port, family)

    def map_to_host_port_ipv4(self, port: int) -> Optional[int]:
        return self._host_port(port, IpFamily.IPV4)

    def map_to_host_port_ipv6(self, port: int) -> Optional[int]:
        return self._host_port(port, IpFamily.IPV6)

    def get_bolt_uri(self, ipv6: bool = False) -> str:
        if ipv6:
            return connection_uris.bolt_uri_ipv6(self)
        return connection_uris.bolt_uri_ipv4(self)

    def get_http_uri(self, ipv6: bool = False) -> str:
        if ipv6:
            return connection_uris.http_uri_ipv6(self)
        return connection_uris.http_uri_ipv4(self)

    def get_driver_auth(self) -> Tuple[str, str]:
        return self.image_descriptor.auth
