"""
Managers for building the override lookup from the process environment and .env files.
"""
import logging
import os
from typing import Dict, List, Optional

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


class EnvironmentManager:
    """
    Merges override variables from the current process and .env files.
    """
    def __init__(self, base_dir: str = "."):
        """
        Initializes the environment manager.

        :param base_dir: The base directory for resolving relative paths to .env files.
        """
        self.base_dir = base_dir

    def get_overrides(self, env_files: Optional[List[str]] = None) -> Dict[str, str]:
        """
        Returns the process environment overlaid with the given .env files.

        Later files override earlier ones; files that do not exist are skipped.

        :param env_files: A list of paths to .env files.
        :return: A dictionary usable as the override lookup of Neo4jBuilder.
        """
        merged_env = os.environ.copy()

        for env_file in env_files or []:
            file_path = os.path.join(self.base_dir, env_file)
            if not os.path.exists(file_path):
                logger.debug("Skipping missing env file %s", file_path)
                continue
            # dotenv_values maps bare keys ("KEY" with no '=') to None
            file_env = {k: v for k, v in dotenv_values(file_path).items() if v is not None}
            logger.debug("Loaded %d variables from %s", len(file_env), file_path)
            merged_env.update(file_env)

        return merged_env
