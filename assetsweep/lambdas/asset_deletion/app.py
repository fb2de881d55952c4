import base64
import json
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from assetsweep.config import ConfigurationError, DeletionConfig
from assetsweep.models.deletion import DeletionRequest, InvalidDeletionRequest, to_json
from assetsweep.services.asset_deleter import AssetDeleter, AssetDeletionError
from assetsweep.services.tenable_client import TenableClient
from assetsweep.utils.secrets_handler import SecretsHandler, SecretStoreError

logger = logging.getLogger()
logger.setLevel(logging.INFO)

SUCCESS_MESSAGE = "Asset deletion process initiated for all provided IP addresses"


def _response(body: Dict[str, Any], status: int) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }

def _ok(body: Dict[str, Any], status=200): return _response(body, status)
def _err(msg: str, status=500):            return _response({"error": msg}, status)


def _payload_from_event(event: Any) -> Any:
    """
    API Gateway proxy events carry the request as a (possibly base64) JSON
    string under "body". Direct invocations pass the payload as the event.
    """
    if not isinstance(event, dict) or "body" not in event:
        return event

    body = event["body"]
    if body is None:
        raise InvalidDeletionRequest("request body is empty")
    if isinstance(body, (dict, list)):
        return body
    try:
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body).decode("utf-8")
        return json.loads(body)
    except ValueError as e:
        raise InvalidDeletionRequest(f"request body is not valid JSON: {e}")


def _fetch_credentials(config: DeletionConfig, secrets: SecretsHandler) -> Tuple[str, str]:
    access_key = secrets.get_secret(config.access_key_secret)
    secret_key = secrets.get_secret(config.secret_key_secret)
    return access_key.value, secret_key.value


def handle_delete_assets(
    request: DeletionRequest,
    config: DeletionConfig,
    secrets: Optional[SecretsHandler] = None,
    client_factory: Optional[Callable[..., TenableClient]] = None,
) -> Dict[str, Any]:
    """
    Run one deletion request end to end and map the result to a response.

    ``secrets`` and ``client_factory`` exist so tests and the CLI can swap in
    their own collaborators.
    """
    if not request.ip_addresses:
        logger.info("No IP addresses supplied; nothing to delete")
        return _ok({"message": SUCCESS_MESSAGE})

    try:
        if secrets is None:
            secrets = SecretsHandler(config.secret_store_url, region_name=config.region)
        access_key, secret_key = _fetch_credentials(config, secrets)
    except SecretStoreError as e:
        logger.error(f"Could not load scanner credentials: {e}")
        return _err("Failed to retrieve scanner credentials", 500)

    client = (client_factory or TenableClient)(
        access_key=access_key,
        secret_key=secret_key,
        base_url=config.tenable_base_url,
        timeout=config.timeout,
    )
    try:
        outcomes = AssetDeleter(client).delete_all(request.ip_addresses)
    except AssetDeletionError as e:
        logger.info(f"Aborted after {len(e.outcomes)} of {len(request.ip_addresses)} IP addresses")
        for outcome in e.outcomes:
            logger.info("Outcome: %s", to_json(outcome))
        return _err(str(e), 500)
    finally:
        client.close()

    for outcome in outcomes:
        logger.info("Outcome: %s", to_json(outcome))
    return _ok({"message": SUCCESS_MESSAGE})


def lambda_handler(event, context):
    """
    HTTP-triggered entrypoint. Expected body:
    {
        "ipAddresses": ["10.0.0.1", "10.0.0.2"]
    }
    Responses: 400 when configuration or payload is unusable, 500 naming the
    first IP whose request failed, 200 otherwise.
    """
    logger.info("Processing a request to delete assets")

    try:
        config = DeletionConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return _err(str(e), 400)

    try:
        request = DeletionRequest.from_payload(_payload_from_event(event))
    except InvalidDeletionRequest as e:
        logger.warning(f"Rejected request: {e}")
        return _err(str(e), 400)

    return handle_delete_assets(request, config)
