import base64
import json
import logging
from typing import Any, Dict, Optional

from assetsweep.config import ConfigurationError, PathApiConfig
from assetsweep.models.paths import InvalidOperatingSystem, OperatingSystem, normalize_path
from assetsweep.utils.s3_handler import S3Handler
from .repository import S3PathRepository

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def _response(body: Dict[str, Any], status: int) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }

def _ok(body, status=200): return _response(body, status)
def _err(msg, status=500): return _response({"error": msg}, status)


class BadRequest(ValueError):
    pass


def _repository(config: PathApiConfig) -> S3PathRepository:
    handler = S3Handler(bucket_name=config.bucket, region_name=config.region)
    return S3PathRepository(handler, prefix=config.prefix)


def _json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    body = event.get("body")
    if body is None:
        return {}
    if isinstance(body, str):
        try:
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            body = json.loads(body) if body.strip() else {}
        except ValueError:
            raise BadRequest("request body is not valid JSON")
    if not isinstance(body, dict):
        raise BadRequest("request body must be a JSON object")
    return body


def _entry(event: Dict[str, Any]):
    data = _json_body(event)
    # DELETE clients sometimes send the selection as query parameters
    if not data:
        data = event.get("queryStringParameters") or {}
    path = normalize_path(data.get("path"))
    if not path:
        raise BadRequest("'path' is required")
    try:
        os_name = OperatingSystem.parse(data.get("os")).value
    except InvalidOperatingSystem as e:
        raise BadRequest(str(e))
    return os_name, path


def add_path(event, repo: S3PathRepository):
    os_name, path = _entry(event)
    if repo.add(os_name, path):
        logger.info("Stored %s under %s", path, os_name)
        return _ok({"message": "created", "os": os_name, "path": path}, 201)
    return _ok({"message": "already present", "os": os_name, "path": path}, 200)


def get_paths(event, repo: S3PathRepository):
    return _ok(repo.load().to_dict())


def delete_path(event, repo: S3PathRepository):
    os_name, path = _entry(event)
    if not repo.delete(os_name, path):
        return _err(f"path not found under {os_name}: {path}", 404)
    logger.info("Deleted %s from %s", path, os_name)
    return _ok({"message": "deleted", "os": os_name, "path": path})


ROUTES = {
    ("POST", "/addPath"): add_path,
    ("GET", "/getPaths"): get_paths,
    ("DELETE", "/deletePath"): delete_path,
}


def lambda_handler(event, context, repo: Optional[S3PathRepository] = None):
    """
    API Gateway proxy entrypoint for the remote path registry:
      POST   /addPath     {"path": "...", "os": "windows|linux|mac"}
      GET    /getPaths    -> {"windows": [...], ...}
      DELETE /deletePath  {"path": "...", "os": "..."}
    """
    event = event or {}
    method = (event.get("httpMethod") or "").upper()
    route = event.get("resource") or event.get("path") or ""
    handler = ROUTES.get((method, route.rstrip("/") or "/"))
    if handler is None:
        return _err("Endpoint not found", 404)

    try:
        if repo is None:
            repo = _repository(PathApiConfig.from_env())
        return handler(event, repo)
    except BadRequest as e:
        return _err(str(e), 400)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return _err(str(e), 500)
    except RuntimeError as e:
        logger.error("Storage error handling %s %s: %s", method, route, e)
        return _err("storage error", 502)
