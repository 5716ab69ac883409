"""Schema Registry — holds the workspace schema used for completions.

Fetches ``GET {api_url}/workspaces/{workspace_id}/schema`` from the upstream
schema service. One schema is held at a time and each successful load
replaces it wholesale; loading another workspace discards the previous one.

Load failures are reported through the boolean return value and
``last_error``; the registry itself never raises and never logs.
"""

import json
import time
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from kql_intellisense.core.config import settings
from kql_intellisense.core.metrics import schema_load_duration_seconds
from kql_intellisense.schemas.schema import WorkspaceSchema


def schema_url(api_url: str, workspace_id: str) -> str:
    # The id is a single path segment; "/", "?" and "#" must not escape it
    segment = quote(workspace_id, safe="")
    return f"{api_url.rstrip('/')}/workspaces/{segment}/schema"


class SchemaRegistry:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._client = client
        self._timeout = (
            timeout
            if timeout is not None
            else settings.schema_api.schema_request_timeout
        )
        self._schema: WorkspaceSchema | None = None
        self._workspace_id: str | None = None
        self.last_error: str | None = None

    @property
    def workspace_id(self) -> str | None:
        """Workspace of the schema currently held, if any."""
        return self._workspace_id

    def current(self) -> WorkspaceSchema | None:
        return self._schema

    def clear(self) -> None:
        self._schema = None
        self._workspace_id = None

    async def load(self, workspace_id: str, api_url: str, token: str) -> bool:
        """Fetch and install the schema for ``workspace_id``.

        Returns True when the schema was replaced. On any failure the
        previously held schema (or None) is kept and False is returned.
        Concurrent loads are last-completion-wins.
        """
        start = time.perf_counter()
        try:
            schema = await self._fetch(
                schema_url(api_url, workspace_id),
                headers={"Authorization": f"Bearer {token}"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self.last_error = f"{type(exc).__name__}: {exc}"
            return False
        except UnicodeEncodeError:
            self.last_error = "invalid token: header values must be ASCII"
            return False
        except ValidationError as exc:
            self.last_error = f"malformed schema body: {exc.error_count()} error(s)"
            return False
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self.last_error = f"invalid JSON: {exc}"
            return False
        finally:
            schema_load_duration_seconds.observe(time.perf_counter() - start)

        self._schema = schema
        self._workspace_id = workspace_id
        self.last_error = None
        return True

    async def _fetch(self, url: str, headers: dict[str, str]) -> WorkspaceSchema:
        if self._client is not None:
            response = await self._client.get(url, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, headers=headers)

        response.raise_for_status()
        return WorkspaceSchema.model_validate(response.json())
