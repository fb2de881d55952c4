import logging
from typing import Iterable, List

from assetsweep.models.deletion import DeletionOutcome, DeletionStatus
from assetsweep.services.tenable_client import ScannerRequestError

logger = logging.getLogger(__name__)


class AssetDeletionError(RuntimeError):
    """Raised when the loop aborts; ``outcomes`` covers the IPs handled so far."""

    def __init__(self, ip: str, outcomes: List[DeletionOutcome]):
        super().__init__(f"An error occurred while processing IP: {ip}")
        self.ip = ip
        self.outcomes = outcomes


class AssetDeleter:
    def __init__(self, client):
        self.client = client

    def delete_all(self, ip_addresses: Iterable[str]) -> List[DeletionOutcome]:
        """
        Request deletion for each IP in order, one call per IP.

        A 200 means the job was initiated; any other status is treated as
        accepted and processing continues. The first transport error stops
        the loop and raises AssetDeletionError. Jobs already queued for
        earlier IPs stay in effect.
        """
        outcomes: List[DeletionOutcome] = []
        for ip in ip_addresses:
            try:
                response = self.client.request_asset_deletion(ip)
            except ScannerRequestError as e:
                logger.error(f"Error deleting asset with IP: {ip}: {e}")
                outcomes.append(DeletionOutcome(ip=ip, status=DeletionStatus.ERROR, detail=str(e)))
                raise AssetDeletionError(ip, outcomes) from e

            if response.status_code == 200:
                logger.info(f"Successfully initiated deletion for IP: {ip}")
                outcomes.append(DeletionOutcome(ip=ip, status=DeletionStatus.INITIATED, status_code=200))
            else:
                logger.info(
                    "The deletion request has been accepted and is being processed. "
                    "This does not mean the deletion is complete yet: %s, Status Code: %s",
                    ip, response.status_code,
                )
                outcomes.append(DeletionOutcome(
                    ip=ip, status=DeletionStatus.ACCEPTED, status_code=response.status_code,
                ))
        return outcomes
