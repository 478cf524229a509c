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
Converters for generating docker-compose service definitions from a Neo4jImage.
"""
import logging
import os
from jinja2 import Template
from ..MODELS.neo4j_image import Neo4jImage

logger = logging.getLogger(__name__)

# Values go through tojson: a JSON string is a valid YAML scalar.
COMPOSE_TEMPLATE = """services:
  {{ service | tojson }}:
    image: {{ image | tojson }}
    environment:
{%- for k, v in environment.items() %}
      {{ k }}: {{ v | tojson }}
{%- endfor %}
    ports:
{%- for port in ports %}
      - "{{ port }}"
{%- endfor %}
"""


class ComposeConverter:
    """
    Renders a Neo4jImage as a docker-compose service.
    """

    def __init__(self, image: Neo4jImage, service_name: str = "neo4j"):
        """
        Initializes the compose converter.

        :param image: The finalized image descriptor.
        :param service_name: Name of the service in the compose file.
        """
        self.image = image
        self.service_name = service_name
        self.template = Template(COMPOSE_TEMPLATE)

    def render(self) -> str:
        """
        Renders the compose document.

        :return: The YAML content.
        """
        return self.template.render(
            service=self.service_name,
            image=self.image.image,
            environment=self.image.env_vars,
            ports=self.image.exposed_ports,
        )

    def convert(self, output_path: str = "docker-compose.yml") -> str:
        """
        Writes the compose document to a file.

        :param output_path: Where to write the compose file.
        :return: The path written.
        """
        parent = os.path.dirname(output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        with open(output_path, "w") as f:
            f.write(self.render())

        logger.info("Compose file for %s written to %s", self.image.image, output_path)
        return output_path
