"""
HTTP client for the Coggle REST API.

This module issues authenticated requests against the Coggle service and
decodes the JSON responses into pydantic models. Every public method makes
exactly one request.
"""

import httpx
import logging
from functools import lru_cache
from typing import Any, List, Optional
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..config import get_config
from ..errors import TransportError
from ..models import DiagramResource
from ..validation import validate_organization_name
from .diagram import Diagram


@lru_cache(maxsize=None)
def _adapter_for(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def normalize_query(query: str) -> str:
    """
    Turn a caller-supplied query fragment into a `&`-prefixed, encoded suffix.

    "x=1" and "&x=1" give the same result; an empty fragment gives "".
    Keys and values are percent-encoded, so callers pass them raw.
    """
    parts = []
    for pair in query.split('&'):
        if not pair:
            continue
        key, sep, value = pair.partition('=')
        parts.append(quote(key, safe='') + sep + quote(value, safe=''))

    if not parts:
        return ""
    return "&" + "&".join(parts)


class CoggleApi:
    """
    Authenticated client for one Coggle service.

    The access token travels as the `access_token` query parameter of every
    request. Instances hold no mutable state besides the underlying
    httpx.Client and can be shared between threads.
    """

    def __init__(self, token: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize the client.

        Args:
            token: Access token (defaults to config value)
            base_url: Service URL (defaults to config value)
            timeout: Request timeout in seconds (defaults to config value)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests

        Raises:
            ValueError: If no access token is available
        """
        config = get_config()
        self.token = token or config.token
        if not self.token:
            raise ValueError("A Coggle access token is required")

        self.base_url = (base_url or config.base_url).rstrip('/')
        self.client = httpx.Client(
            timeout=timeout if timeout is not None else config.timeout,
            transport=transport
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self.client.close()

    def build_url(self, endpoint: str, query: str = "") -> str:
        """
        Build the full request URL for a server-relative endpoint.

        Args:
            endpoint: Path such as "/api/1/diagrams"
            query: Extra query fragment, with or without a leading "&"

        Returns:
            base_url + endpoint + "?access_token=<token>" + the extra fragment
        """
        return (
            self.base_url
            + endpoint
            + "?access_token="
            + quote(self.token, safe='')
            + normalize_query(query)
        )

    def _request(self, method: str, endpoint: str, query: str = "",
                 body: Any = None, response_type: Any = None) -> Any:
        """
        Send one request and decode its JSON response.

        Args:
            method: HTTP verb
            endpoint: Server-relative path with placeholders already replaced
            query: Extra query fragment
            body: JSON-serializable body or pydantic model (None sends no body)
            response_type: Type to validate the decoded JSON into; None returns
                the raw decoded JSON

        Returns:
            The decoded response

        Raises:
            TransportError: On network failure, non-2xx status or undecodable body
        """
        if isinstance(body, BaseModel):
            body = body.model_dump(by_alias=True, exclude_none=True)

        logging.debug(f"Coggle request: {method} {endpoint}")

        try:
            response = self.client.request(
                method,
                self.build_url(endpoint, query),
                json=body
            )
            response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logging.warning(f"Coggle request {method} {endpoint} failed with status {status}")
            raise TransportError(
                f"Coggle request {method} {endpoint} failed with status {status}",
                method=method, endpoint=endpoint, status_code=status
            ) from e
        except httpx.HTTPError as e:
            logging.warning(f"Failed to connect to Coggle for {method} {endpoint}: {e}")
            raise TransportError(
                f"Failed to connect to Coggle: {e}",
                method=method, endpoint=endpoint
            ) from e

        if not response.content:
            data = None
        else:
            try:
                data = response.json()
            except ValueError as e:
                # covers both JSONDecodeError and UnicodeDecodeError
                logging.warning(f"Invalid JSON in response to {method} {endpoint}: {e}")
                raise TransportError(
                    f"Invalid JSON in Coggle response: {e}",
                    method=method, endpoint=endpoint, status_code=response.status_code
                ) from e

        if response_type is None:
            return data

        try:
            return _adapter_for(response_type).validate_python(data)
        except PydanticValidationError as e:
            logging.warning(f"Unexpected response shape for {method} {endpoint}: {e}")
            raise TransportError(
                f"Unexpected Coggle response shape: {e}",
                method=method, endpoint=endpoint, status_code=response.status_code
            ) from e

    def get(self, endpoint: str, query: str = "", response_type: Any = None) -> Any:
        """Issue a GET request."""
        return self._request("GET", endpoint, query, response_type=response_type)

    def post(self, endpoint: str, query: str = "", body: Any = None,
             response_type: Any = None) -> Any:
        """Issue a POST request with a JSON body."""
        return self._request("POST", endpoint, query, body, response_type)

    def put(self, endpoint: str, query: str = "", body: Any = None,
            response_type: Any = None) -> Any:
        """Issue a PUT request with a JSON body."""
        return self._request("PUT", endpoint, query, body, response_type)

    def delete(self, endpoint: str, query: str = "", response_type: Any = None) -> Any:
        """Issue a DELETE request."""
        return self._request("DELETE", endpoint, query, response_type=response_type)

    def list_diagrams(self, organization: Optional[str] = None) -> List[Diagram]:
        """
        List the diagrams visible to the token holder.

        Args:
            organization: Optional organization slug to list that organization's
                diagrams instead of the caller's own

        Returns:
            One Diagram handle per diagram

        Raises:
            InvalidOrganizationNameError: If the slug is malformed (no request is made)
            TransportError: If the request fails
        """
        if organization is not None:
            validate_organization_name(organization)
            endpoint = f"/api/1/organisations/{organization}/diagrams"
        else:
            endpoint = "/api/1/diagrams"

        resources = self.get(endpoint, response_type=List[DiagramResource])
        logging.info(f"Fetched {len(resources)} diagrams from {endpoint}")
        return [Diagram.from_resource(self, resource) for resource in resources]

    def create_diagram(self, title: str) -> Diagram:
        """Create a new diagram and return its handle."""
        resource = self.post(
            "/api/1/diagrams",
            body={"title": title},
            response_type=DiagramResource
        )
        logging.info(f"Created diagram {resource.id}")
        return Diagram.from_resource(self, resource)

    def diagram(self, diagram_id: str, title: str = "") -> Diagram:
        """Wrap an already known diagram id without contacting the server."""
        return Diagram(api_client=self, id=diagram_id, title=title)
