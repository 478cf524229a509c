"""
Host port lookup over Docker's published port bindings.
"""
from enum import Enum
from typing import Dict, List, Optional


class IpFamily(str, Enum):
    """IP family of a host binding."""
    IPV4 = "ipv4"
    IPV6 = "ipv6"


def binding_family(host_ip: str) -> IpFamily:
    """
    IPv6 addresses contain a colon; anything else, including an empty
    HostIp, is treated as IPv4.
    """
    return IpFamily.IPV6 if ":" in (host_ip or "") else IpFamily.IPV4


def host_port_for(bindings: Optional[Dict[str, Optional[List[Dict[str, str]]]]],
                  container_port: int,
                  family: IpFamily,
                  protocol: str = "tcp") -> Optional[int]:
    """
    Returns the host port a container port is published on.

    :param bindings: NetworkSettings.Ports of an inspected container, e.g.
        {"7687/tcp": [{"HostIp": "0.0.0.0", "HostPort": "32768"}]}.
    :param container_port: The port inside the container.
    :param family: Which host address family to look for.
    :param protocol: Transport protocol of the binding.
    :return: The host port, or None if the port is not published for that family.
    """
    entries = (bindings or {}).get(f"{container_port}/{protocol}") or []
    for entry in entries:
        if binding_family(entry.get("HostIp", "")) != family:
            continue
        host_port = entry.get("HostPort")
        if host_port:
            return int(host_port)
    return None
