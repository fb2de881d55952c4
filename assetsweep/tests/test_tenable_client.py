import unittest
from unittest.mock import Mock

import requests

from assetsweep.services.tenable_client import (
    ScannerRequestError,
    TenableClient,
    build_api_keys_header,
)


class TestTenableClient(unittest.TestCase):

    def _client(self, **post_kwargs):
        session = requests.Session()
        session.post = Mock(**post_kwargs)
        client = TenableClient("ak", "sk", base_url="https://scanner.example/", timeout=7, session=session)
        return client, session

    def test_api_keys_header_format(self):
        self.assertEqual(build_api_keys_header("k1", "k2"), "accessKey=k1; secretKey=k2")

    def test_session_headers(self):
        client, session = self._client()
        self.assertEqual(session.headers["X-ApiKeys"], "accessKey=ak; secretKey=sk")
        self.assertEqual(session.headers["accept"], "application/json")

    def test_posts_ipv4_query(self):
        response = Mock(status_code=200)
        client, session = self._client(return_value=response)

        self.assertIs(client.request_asset_deletion("10.1.2.3"), response)
        session.post.assert_called_once_with(
            "https://scanner.example/api/v2/assets/bulk-jobs/delete",
            json={"query": {"field": "ipv4", "operator": "eq", "value": "10.1.2.3"}},
            timeout=7,
        )

    def test_http_error_status_is_returned_not_raised(self):
        client, _ = self._client(return_value=Mock(status_code=500))
        self.assertEqual(client.request_asset_deletion("10.1.2.3").status_code, 500)

    def test_transport_errors_are_wrapped(self):
        for exc in (requests.exceptions.ConnectionError("down"),
                    requests.exceptions.Timeout("slow"),
                    requests.exceptions.RequestException("boom")):
            client, _ = self._client(side_effect=exc)
            with self.assertRaises(ScannerRequestError) as ctx:
                client.request_asset_deletion("10.9.9.9")
            self.assertEqual(ctx.exception.ip, "10.9.9.9")
            self.assertIs(ctx.exception.__cause__, exc)

    def test_context_manager_closes_session(self):
        session = Mock()
        session.headers = {}
        with TenableClient("ak", "sk", session=session):
            pass
        session.close.assert_called_once()
