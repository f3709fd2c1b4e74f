"""AWS profile discovery.

Profiles are read from the shared AWS config and credentials files
(``~/.aws/config`` and ``~/.aws/credentials``, or the locations named by
``AWS_CONFIG_FILE`` / ``AWS_SHARED_CREDENTIALS_FILE``) through botocore.
"""

import logging
from typing import Final

import boto3
from botocore.exceptions import BotoCoreError

from cloudgate.aws.exceptions import ConfigurationError

logger: Final = logging.getLogger(__name__)


def list_available_profiles() -> list[str]:
    """List the named AWS profiles, sorted alphabetically.

    Returns:
        Profile names; empty when no shared config file exists.

    Raises:
        ConfigurationError: If the shared config files cannot be parsed.

    Example:
        >>> list_available_profiles()
        ['default', 'dev', 'prod']
    """
    try:
        profiles = boto3.session.Session().available_profiles
    except BotoCoreError as e:
        raise ConfigurationError(f"Unable to read AWS profiles: {e}") from e

    logger.debug(f"Found {len(profiles)} AWS profiles")
    return sorted(set(profiles))
