import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import httpx
from pydantic import ValidationError

from .observability import GQL_CALL, log_event
from .operations import GraphQLOperation, T

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "github-projects-mcp"


class GitHubClientError(Exception):
    """Base error for client failures."""


class GitHubHTTPError(GitHubClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.response_json = response_json
        self.response_text = response_text


class GitHubGraphQLError(GitHubClientError):
    """The response carried an ``errors`` array we are not allowed to ignore."""

    def __init__(self, errors: List[Dict[str, Any]]):
        messages = [
            str(err.get("message") or "unknown error")
            for err in errors
            if isinstance(err, dict)
        ]
        super().__init__(", ".join(messages) or "unknown GraphQL error")
        self.errors = errors


class GitHubParseError(GitHubClientError):
    pass


class GitHubModelValidationError(GitHubClientError):
    pass


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts, queries only
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})


def _error_root(error: Mapping[str, Any]) -> Optional[str]:
    path = error.get("path")
    if isinstance(path, list) and path:
        return str(path[0])
    return None


def split_ignorable_errors(
    errors: Iterable[Any], ignore_not_found: Iterable[str] = ()
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Partition GraphQL errors into (ignored, fatal).
    Only NOT_FOUND errors rooted at one of ``ignore_not_found`` are ignorable.
    """
    roots = set(ignore_not_found)
    ignored: List[Dict[str, Any]] = []
    fatal: List[Dict[str, Any]] = []
    for err in errors:
        if not isinstance(err, dict):
            fatal.append({"message": str(err)})
            continue
        if err.get("type") == "NOT_FOUND" and _error_root(err) in roots:
            ignored.append(err)
        else:
            fatal.append(err)
    return ignored, fatal


class GitHubGraphQLClient:
    """
    Shared async client for the GitHub GraphQL endpoint.
    - Handles bearer auth, endpoint URL, timeouts, retries for queries
    - Validates ``data`` against the operation's response model
    - No formatting; tools own presentation
    """

    def __init__(
        self,
        *,
        token: str,
        graphql_url: str = DEFAULT_GRAPHQL_URL,
        timeout_seconds: float = 10.0,
        retry: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
        request_id: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        graphql_url = (graphql_url or "").strip()
        token = token or ""

        if not graphql_url:
            raise ValueError("graphql_url must be provided.")
        if not token:
            raise ValueError("token must be provided.")

        self.graphql_url = graphql_url
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("github_projects_mcp.client")
        self.request_id = request_id

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": user_agent or USER_AGENT,
            },
            timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "GitHubGraphQLClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def execute(
        self,
        document: str,
        variables: Optional[Dict[str, Any]] = None,
        *,
        operation_name: Optional[str] = None,
        tool: Optional[str] = None,
        retryable: bool = True,
    ) -> Dict[str, Any]:
        """
        POST one GraphQL document and return the parsed response envelope.
        - Retries on transient failures (network/timeouts + 502/503/504) when retryable
        - Raises GitHubHTTPError on non-2xx HTTP responses
        - Raises GitHubClientError on network/timeout errors after retries
        - Raises GitHubParseError if response isn't a JSON object
        The ``errors`` array is left for the caller to judge.
        """
        payload: Dict[str, Any] = {"query": document, "variables": variables or {}}
        if operation_name:
            payload["operationName"] = operation_name

        max_retries = self.retry.max_retries if retryable else 0
        attempt = 0

        while True:
            start = time.perf_counter()
            try:
                resp = await self.http.post(self.graphql_url, json=payload)
            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as exc:
                self._log_call(tool, operation_name, start, attempt, exc=exc)
                if attempt < max_retries:
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise GitHubClientError(
                    f"Network/timeout error calling {self.graphql_url}: {exc}"
                ) from exc
            except httpx.HTTPError as exc:
                # Other httpx exceptions (rare) - do not blindly retry
                self._log_call(tool, operation_name, start, attempt, exc=exc)
                raise GitHubClientError(
                    f"HTTPX error calling {self.graphql_url}: {exc}"
                ) from exc

            self._log_call(tool, operation_name, start, attempt, status=resp.status_code)

            if resp.status_code in self.retry.retry_statuses and attempt < max_retries:
                await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                attempt += 1
                continue

            if resp.status_code < 200 or resp.status_code >= 300:
                raise self._to_http_error(resp)

            return self._safe_json(resp)

    async def query(
        self,
        operation: GraphQLOperation[T],
        variables: Optional[Dict[str, Any]] = None,
        *,
        tool: Optional[str] = None,
        ignore_not_found: Iterable[str] = (),
    ) -> T:
        """Run a read operation and validate its data into the operation's model."""
        envelope = await self.execute(
            operation.document,
            variables,
            operation_name=operation.name,
            tool=tool,
            retryable=not operation.mutation,
        )
        return self._to_model(operation, envelope, ignore_not_found)

    async def mutate(
        self,
        operation: GraphQLOperation[T],
        mutation_input: Dict[str, Any],
        variables: Optional[Dict[str, Any]] = None,
        *,
        tool: Optional[str] = None,
    ) -> T:
        """Run a mutation with ``$input``. Mutations are never retried."""
        merged = dict(variables or {})
        merged["input"] = mutation_input
        envelope = await self.execute(
            operation.document,
            merged,
            operation_name=operation.name,
            tool=tool,
            retryable=False,
        )
        return self._to_model(operation, envelope, ())

    def _to_model(
        self,
        operation: GraphQLOperation[T],
        envelope: Dict[str, Any],
        ignore_not_found: Iterable[str],
    ) -> T:
        errors = envelope.get("errors") or []
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            ignored, fatal = split_ignorable_errors(errors, ignore_not_found)
            if fatal:
                raise GitHubGraphQLError(fatal)
            for err in ignored:
                self.log.debug(
                    "Ignoring NOT_FOUND on %s: %s", _error_root(err), err.get("message")
                )

        data = envelope.get("data")
        try:
            return operation.response_model.model_validate(data or {})
        except ValidationError as exc:
            raise GitHubModelValidationError(
                f"Response did not match model {operation.response_model.__name__}: {exc}"
            ) from exc

    def _log_call(
        self,
        tool: Optional[str],
        operation_name: Optional[str],
        start: float,
        attempt: int,
        *,
        status: Optional[int] = None,
        exc: Optional[BaseException] = None,
    ) -> None:
        fields: Dict[str, Any] = {
            "request_id": self.request_id,
            "tool": tool,
            "operation": operation_name,
            "status": status if exc is None else "exception",
            "duration_ms": int((time.perf_counter() - start) * 1000),
            "attempt": attempt,
        }
        if exc is not None:
            fields["error_type"] = type(exc).__name__
        log_event(GQL_CALL, **fields)

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        if not resp.content:
            raise GitHubParseError(
                f"Empty response body from {resp.request.method} {resp.request.url}"
            )

        try:
            data = resp.json()
        except Exception as exc:
            snippet = (resp.text or "")[:500]
            raise GitHubParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise GitHubParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(self, resp: httpx.Response) -> GitHubHTTPError:
        url = str(resp.request.url)
        # Try JSON first; fall back to text snippet.
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                message = parsed.get("message") or message
        except Exception:
            response_text = (resp.text or "")[:500]

        return GitHubHTTPError(
            status_code=resp.status_code,
            method=resp.request.method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )
