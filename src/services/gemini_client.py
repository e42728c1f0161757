from __future__ import annotations

from typing import Any

import requests


# API docs: https://ai.google.dev/api/generate-content
class GenerativeAPIError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, payload: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class GeminiClient:
    """Minimal Generative Language API client covering text generation only."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            msg = "api_key must be provided"
            raise ValueError(msg)

        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def generate_text(self, prompt: str) -> str:
        if not prompt:
            msg = "prompt must be provided"
            raise ValueError(msg)

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        payload = self._request("POST", f"/models/{self.model}:generateContent", json=body)

        candidates = payload.get("candidates") or []
        if not candidates:
            raise GenerativeAPIError("Generative API returned no candidates", payload=payload)
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(str(part.get("text", "")) for part in parts).strip()
        if not text:
            raise GenerativeAPIError("Generative API returned an empty candidate", payload=payload)
        return text

    def _request(self, method: str, path: str, *, json: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                json=json,
                timeout=self.timeout,
                headers={"x-goog-api-key": self.api_key},
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            resp = exc.response
            status_code = getattr(resp, "status_code", None)
            error_payload: Any | None = None
            message = "Generative API request failed"
            if resp is not None:
                try:
                    error_payload = resp.json()
                    err = error_payload.get("error") if isinstance(error_payload, dict) else None
                    if isinstance(err, dict) and err.get("message"):
                        message = err["message"]
                except ValueError:
                    error_payload = resp.text
            raise GenerativeAPIError(message, status_code=status_code, payload=error_payload) from exc
        except requests.RequestException as exc:
            status_code = getattr(getattr(exc, "response", None), "status_code", None)
            raise GenerativeAPIError("Generative API request failed", status_code=status_code) from exc

        try:
            payload_raw = response.json()
        except ValueError as exc:
            raise GenerativeAPIError("Generative API returned invalid JSON", payload=response.text) from exc

        if not isinstance(payload_raw, dict):
            raise GenerativeAPIError("Generative API returned unexpected payload type", payload=payload_raw)

        return payload_raw


__all__ = ["GeminiClient", "GenerativeAPIError"]
