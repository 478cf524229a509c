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
Unit tests for port lookup, connection URIs, readiness and the container adapter.
"""
from unittest import mock

import pytest
from testcontainers.core.container import DockerContainer

from tcneo4j.BUILDERS.neo4j_builder import Neo4jBuilder
from tcneo4j.MODELS.neo4j_image import READY_CONDITIONS
from tcneo4j.RUNNERS import neo4j_container
from tcneo4j.RUNNERS.connection_uris import (
    bolt_uri_ipv4,
    bolt_uri_ipv6,
    http_uri_ipv4,
    http_uri_ipv6,
)
from tcneo4j.RUNNERS.neo4j_container import Neo4jLabsContainer
from tcneo4j.RUNNERS.port_bindings import IpFamily, host_port_for
from tcneo4j.RUNNERS.readiness import ready_predicate

BINDINGS = {
    "7687/tcp": [
        {"HostIp": "0.0.0.0", "HostPort": "32768"},
        {"HostIp": "::", "HostPort": "32769"},
    ],
    "7474/tcp": [
        {"HostIp": "0.0.0.0", "HostPort": "32770"},
        {"HostIp": "::", "HostPort": "32771"},
    ],
    "9999/tcp": None,
}

IPV4_ONLY = {
    "7687/tcp": [{"HostIp": "0.0.0.0", "HostPort": "32768"}],
    "7474/tcp": [{"HostIp": "0.0.0.0", "HostPort": "32770"}],
}


class FakeContainer:
    """Port mapper backed by a plain dict of bindings."""

    def __init__(self, bindings):
        self.bindings = bindings

    def map_to_host_port_ipv4(self, port):
        return host_port_for(self.bindings, port, IpFamily.IPV4)

    def map_to_host_port_ipv6(self, port):
        return host_port_for(self.bindings, port, IpFamily.IPV6)


class TestHostPortFor:
    """Tests for host_port_for."""

    def test_ipv4(self):
        assert host_port_for(BINDINGS, 7687, IpFamily.IPV4) == 32768

    def test_ipv6(self):
        assert host_port_for(BINDINGS, 7687, IpFamily.IPV6) == 32769

    def test_missing_family(self):
        assert host_port_for(IPV4_ONLY, 7474, IpFamily.IPV6) is None

    def test_unpublished_port(self):
        assert host_port_for(BINDINGS, 9999, IpFamily.IPV4) is None
        assert host_port_for(BINDINGS, 1234, IpFamily.IPV4) is None
        assert host_port_for(None, 7687, IpFamily.IPV4) is None

    def test_empty_host_ip_is_ipv4(self):
        bindings = {"7687/tcp": [{"HostIp": "", "HostPort": "40000"}]}
        assert host_port_for(bindings, 7687, IpFamily.IPV4) == 40000


class TestConnectionUris:
    """Tests for the URI helpers."""

    def test_bolt_uris(self):
        container = FakeContainer(BINDINGS)
        assert bolt_uri_ipv4(container) == "bolt://127.0.0.1:32768"
        assert bolt_uri_ipv6(container) == "bolt://[::1]:32769"

    def test_http_uris(self):
        container = FakeContainer(BINDINGS)
        assert http_uri_ipv4(container) == "http://127.0.0.1:32770"
        assert http_uri_ipv6(container) == "http://[::1]:32771"

    def test_missing_mapping_is_fatal(self):
        """Test that an unpublished port raises RuntimeError."""
        with pytest.raises(RuntimeError, match="7474"):
            http_uri_ipv6(FakeContainer(IPV4_ONLY))
        with pytest.raises(RuntimeError):
            bolt_uri_ipv4(FakeContainer({}))


class TestReadyPredicate:
    """Tests for ready_predicate."""

    def test_all_markers_in_order(self):
        predicate = ready_predicate(READY_CONDITIONS)
        assert predicate("Bolt enabled on 0.0.0.0:7687\nRemote interface available\nStarted.\n")

    def test_partial_output(self):
        predicate = ready_predicate(READY_CONDITIONS)
        assert not predicate("")
        assert not predicate("Bolt enabled on 0.0.0.0:7687\n")

    def test_markers_must_appear_in_order(self):
        """Test that a marker printed before the previous one does not count."""
        predicate = ready_predicate(READY_CONDITIONS)
        assert not predicate("Started.\nBolt enabled on 0.0.0.0:7687\n")

    def test_no_conditions(self):
        assert ready_predicate([])("")


@pytest.fixture
def patched_docker():
    """Replaces the Docker-facing parts of DockerContainer."""
    with mock.patch.object(DockerContainer, "__init__", return_value=None), \
            mock.patch.object(DockerContainer, "with_env") as with_env, \
            mock.patch.object(DockerContainer, "with_exposed_ports") as with_exposed_ports, \
            mock.patch.object(DockerContainer, "start") as start, \
            mock.patch.object(DockerContainer, "stop") as stop, \
            mock.patch.object(neo4j_container, "wait_for_logs") as wait_for_logs:
        yield mock.Mock(
            with_env=with_env,
            with_exposed_ports=with_exposed_ports,
            start=start,
            stop=stop,
            wait_for_logs=wait_for_logs,
        )


class TestNeo4jLabsContainer:
    """Tests for the testcontainers adapter, without a Docker daemon."""

    def _container(self, **kwargs):
        image = Neo4jBuilder.from_auth_and_version("5", "neo4j", "neo").with_plugin("apoc").build()
        container = Neo4jLabsContainer(image, **kwargs)
        container._container = None
        return container

    def test_applies_environment_and_ports(self, patched_docker):
        self._container()
        patched_docker.with_env.assert_any_call("NEO4J_AUTH", "neo4j/neo")
        patched_docker.with_env.assert_any_call("NEO4JLABS_PLUGINS", '["apoc"]')
        patched_docker.with_exposed_ports.assert_called_once_with(7474, 7687)

    def test_start_waits_through_testcontainers(self, patched_docker):
        container = self._container(startup_timeout=30, poll_interval=0.1)
        assert container.start() is container

        patched_docker.start.assert_called_once()
        args, kwargs = patched_docker.wait_for_logs.call_args
        assert args[0] is container
        assert args[1]("Bolt enabled on x\nStarted.\n")
        assert not args[1]("Bolt enabled on x\n")
        assert kwargs == {"timeout": 30, "interval": 0.1}
        patched_docker.stop.assert_not_called()

    def test_start_stops_container_on_timeout(self, patched_docker):
        """Test that a container that never becomes ready is not left running."""
        patched_docker.wait_for_logs.side_effect = TimeoutError("not ready")
        container = self._container()
        with pytest.raises(TimeoutError):
            container.start()
        patched_docker.stop.assert_called_once()

    def test_driver_auth(self, patched_docker):
        assert self._container().get_driver_auth() == ("neo4j", "neo")
