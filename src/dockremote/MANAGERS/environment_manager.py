"""
Builds the variable context used to interpolate container spec files.
"""
import logging
import os
from typing import Dict, Iterable, Mapping, Optional

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


class EnvironmentManager:
    """
    Merges environment variables from the current process, .env files and
    explicit definitions.
    """
    def __init__(self, base_dir: str = ".", include_os_environ: bool = True):
        """
        :param base_dir: The base directory for resolving relative paths to .env files.
        :param include_os_environ: Start from the variables of the current process.
        """
        self.base_dir = base_dir
        self.include_os_environ = include_os_environ

    def get_merged_environment(self,
                               explicit_env: Optional[Mapping[str, str]] = None,
                               env_files: Iterable[str] = ()) -> Dict[str, str]:
        """
        Later sources override earlier ones: process environment, then each
        .env file in order, then the explicit values.

        :param explicit_env: Explicitly defined variables.
        :param env_files: Paths to .env files; missing files are skipped.
        :return: The merged variables.
        """
        merged_env = dict(os.environ) if self.include_os_environ else {}

        for env_file in env_files:
            file_path = os.path.join(self.base_dir, env_file)
            if not os.path.exists(file_path):
                logger.warning("Env file %s not found, skipping", file_path)
                continue
            # Keys declared without a value come back as None
            values = {k: v for k, v in dotenv_values(file_path).items() if v is not None}
            logger.debug("Loaded %d variables from %s", len(values), file_path)
            merged_env.update(values)

        merged_env.update(explicit_env or {})
        return merged_env
