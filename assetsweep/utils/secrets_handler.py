import boto3
import logging
from dataclasses import dataclass
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


class SecretStoreError(RuntimeError):
    """Raised when a secret cannot be read from the store."""


@dataclass(frozen=True)
class SecretValue:
    name: str
    value: str

    def __repr__(self) -> str:
        # keep secret material out of logs and tracebacks
        return f"SecretValue(name={self.name!r}, value='***')"


class SecretsHandler:
    def __init__(self, endpoint_url: str, region_name: str = "us-east-1", client=None):
        self.endpoint_url = endpoint_url
        if client is not None:
            self.client = client
        else:
            self.client = boto3.client(
                "secretsmanager",
                region_name=region_name,
                endpoint_url=endpoint_url,
            )
        logger.info(f"SecretsHandler initialized for {endpoint_url} in region: {region_name}")

    def get_secret(self, name: str) -> SecretValue:
        """Fetches the current version of secret ``name``."""
        try:
            logger.info(f"Retrieving secret '{name}'")
            response = self.client.get_secret_value(SecretId=name)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            logger.error(f"AWS ClientError retrieving secret '{name}' ({code}): {e}")
            raise SecretStoreError(f"Failed to retrieve secret '{name}'") from e
        except BotoCoreError as e:
            logger.error(f"Could not reach secret store at {self.endpoint_url}: {e}")
            raise SecretStoreError(f"Failed to retrieve secret '{name}'") from e

        if response.get("SecretString") is not None:
            value = response["SecretString"]
        elif response.get("SecretBinary") is not None:
            value = response["SecretBinary"].decode("utf-8")
        else:
            raise SecretStoreError(f"Secret '{name}' has no value")
        return SecretValue(name=name, value=value)
