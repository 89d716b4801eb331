"""Chat Completions endpoint backed by a Responses API upstream.

POST /v1/chat/completions accepts a Chat Completions request, translates it to
a Responses request, forwards it upstream and translates the answer back,
either as one JSON body or as a converted SSE stream.
"""

import json
import logging
from typing import Any, AsyncIterator

import httpx
from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.requests import ClientDisconnect

from ...core.backend import (
    DEFAULT_TIMEOUT,
    Backend,
    build_outbound_headers,
    filter_response_headers,
    format_httpx_error,
)
from ...core.exceptions import InvalidRequestError, StreamMappingError, UpstreamError
from ...core.upstream_transport import get_upstream_transport
from ...responses import (
    adapt_responses_stream,
    chat_completions_to_responses,
    response_to_chat_completion,
)

logger = logging.getLogger("chatbridge")


def _error_detail(error_type: str, code: str, message: str) -> dict[str, Any]:
    return {"error": {"type": error_type, "code": code, "message": message}}


def _transport_error_status(exc: httpx.HTTPError) -> int:
    """504 when the upstream timed out, 502 for any other transport failure."""
    if isinstance(exc, httpx.TimeoutException):
        return 504
    return 502


def validate_chat_payload(payload: Any) -> dict[str, Any]:
    """Check the minimum shape of a chat request body.

    Raises:
        InvalidRequestError: If the body is not an object or has no model
    """
    if not isinstance(payload, dict):
        raise InvalidRequestError(
            "Request body must be a JSON object", code="invalid_request_body"
        )
    model = payload.get("model")
    if not isinstance(model, str) or not model.strip():
        raise InvalidRequestError(
            "You must provide a model parameter", code="missing_parameter"
        )
    return payload


async def chat_completions(request: Request) -> Response:
    """POST /v1/chat/completions - translated to the upstream Responses API."""
    backend: Backend = request.app.state.backend

    try:
        body = await request.body()
        payload = json.loads(body or b"{}")
    except ClientDisconnect:
        logger.warning("Client disconnected before request body was fully read")
        return Response(status_code=499)  # Client Closed Request
    except json.JSONDecodeError as exc:
        logger.error(f"Invalid JSON in chat request: {exc}")
        raise HTTPException(
            status_code=400,
            detail=_error_detail("invalid_request", "invalid_json", "Invalid JSON payload"),
        ) from exc

    try:
        payload = validate_chat_payload(payload)
    except InvalidRequestError as exc:
        logger.error(f"Rejected chat request: {exc.message}")
        raise HTTPException(
            status_code=400,
            detail=_error_detail("invalid_request", exc.code, exc.message),
        ) from exc

    upstream_payload = chat_completions_to_responses(payload)
    if backend.target_model:
        upstream_payload["model"] = backend.target_model

    url = backend.build_url()
    headers = build_outbound_headers(request.headers, backend.api_key)
    upstream_body = json.dumps(upstream_payload, ensure_ascii=False).encode("utf-8")
    is_stream = bool(payload.get("stream", False))

    logger.info(
        f"Chat request for model={payload['model']} stream={is_stream} "
        f"-> {url} ({len(upstream_payload.get('input', []))} input items)"
    )

    try:
        if is_stream:
            return await _streaming_request(backend, url, headers, upstream_body)
        return await _non_streaming_request(backend, url, headers, upstream_body)
    except UpstreamError as exc:
        raise HTTPException(
            status_code=exc.status_code or 502,
            detail=_error_detail("server_error", "upstream_error", exc.message),
        ) from exc


async def _non_streaming_request(
    backend: Backend,
    url: str,
    headers: dict[str, str],
    body: bytes,
) -> Response:
    timeout = backend.timeout or DEFAULT_TIMEOUT
    transport = get_upstream_transport(url)
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.post(url, headers=headers, content=body)
    except httpx.HTTPError as exc:
        message = format_httpx_error(exc, backend, url)
        logger.error(f"Upstream request to {url} failed: {message}")
        raise UpstreamError(message, status_code=_transport_error_status(exc)) from exc

    if resp.status_code >= 400:
        logger.warning(f"Upstream {url} returned error status {resp.status_code}")
        return Response(
            content=resp.content,
            status_code=resp.status_code,
            headers=filter_response_headers(resp.headers),
        )

    try:
        document = resp.json()
    except ValueError as exc:
        raise UpstreamError(f"Upstream returned invalid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise UpstreamError("Upstream response must be a JSON object")

    return JSONResponse(response_to_chat_completion(document))


async def _streaming_request(
    backend: Backend,
    url: str,
    headers: dict[str, str],
    body: bytes,
) -> Response:
    timeout = backend.timeout or DEFAULT_TIMEOUT
    stream_timeout = httpx.Timeout(
        connect=timeout, read=None, write=timeout, pool=timeout
    )
    transport = get_upstream_transport(url)
    client = httpx.AsyncClient(timeout=stream_timeout, transport=transport)
    try:
        upstream_request = client.build_request("POST", url, headers=headers, content=body)
        resp = await client.send(upstream_request, stream=True)
    except httpx.HTTPError as exc:
        await client.aclose()
        message = format_httpx_error(exc, backend, url)
        logger.error(f"Streaming request to {url} failed: {message}")
        raise UpstreamError(message, status_code=_transport_error_status(exc)) from exc

    if resp.status_code >= 400:
        logger.warning(f"Streaming request to {url} returned error status {resp.status_code}")
        data = await resp.aread()
        await resp.aclose()
        await client.aclose()
        return Response(
            content=data,
            status_code=resp.status_code,
            headers=filter_response_headers(resp.headers),
        )

    async def iterator() -> AsyncIterator[bytes]:
        try:
            async for line in adapt_responses_stream(resp.aiter_bytes()):
                yield line
        except StreamMappingError as exc:
            logger.error(f"Aborting stream from {url}: {exc.message}")
        except httpx.HTTPError as exc:
            logger.error(
                f"Upstream stream from {url} broke: {format_httpx_error(exc, backend, url)}"
            )
        finally:
            await resp.aclose()
            await client.aclose()

    logger.info(f"Streaming request to {url} successful, status {resp.status_code}")
    return StreamingResponse(
        iterator(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
