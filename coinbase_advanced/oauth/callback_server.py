"""
OAuth callback listener for Coinbase API integration.

This module provides a small HTTP(S) listener that receives the browser
redirect at the end of the OAuth authorization step. It binds to the host
and port of the configured redirect URL, handles exactly one callback, and
shuts down.

IMPORTANT: This listener is designed for single-user, interactive use. It
runs only for the duration of one authorization attempt.
"""

import logging
import ssl
import threading
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import parse_qs, urljoin, urlsplit

from flask import Flask, Response, request
from werkzeug.serving import make_server

from .config import OAuthConfig
from .exceptions import CallbackParseError

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Go back to your terminal :)"


@dataclass
class AuthorizationResult:
    """
    Result of the OAuth callback.

    Attributes:
        success: Whether a usable callback was received
        authorization_code: Authorization code from callback (if successful)
        state: Anti-forgery state echoed by the server (if successful)
        error: Error code (OAuth error, "invalid_callback", "timeout" or "cancelled")
        error_description: Human-readable error description (if failed)
    """

    success: bool
    authorization_code: Optional[str] = None
    state: Optional[str] = None
    error: Optional[str] = None
    error_description: Optional[str] = None


def parse_callback_target(target: str, redirect_url: str) -> Tuple[str, str]:
    """
    Extract `code` and `state` from the request target of the redirect.

    The target (path and query of the request line) is resolved against the
    scheme and host of the redirect URL before its query is parsed.

    Args:
        target: Request target, e.g. "/?code=abc&state=xyz"
        redirect_url: Configured redirect URL

    Returns:
        Tuple of (code, state)

    Raises:
        CallbackParseError: If either parameter is absent
    """
    base = urlsplit(redirect_url)
    url = urljoin(f"{base.scheme}://{base.netloc}", target)
    params = parse_qs(urlsplit(url).query)

    code = params.get("code", [None])[0]
    state = params.get("state", [None])[0]

    missing = [name for name, value in (("code", code), ("state", state)) if not value]
    if missing:
        raise CallbackParseError(
            f"Callback request is missing {' and '.join(missing)}: {target!r}"
        )
    return code, state


class OAuthCallbackServer:
    """
    One-shot local listener for the OAuth redirect.

    The listener:
    1. Binds to the redirect URL's host:port on start()
    2. Serves requests in a background thread until one callback arrives
    3. Answers that callback with a short plaintext page
    4. Stops accepting connections

    wait_for_callback() is bounded by a timeout, and cancel() can be called
    from any thread to abandon the wait.
    """

    def __init__(self, config: OAuthConfig):
        """
        Initialize callback listener.

        Args:
            config: OAuth configuration with the redirect URL
        """
        self.config = config
        self.app = Flask(__name__)
        self.app.logger.setLevel(logging.WARNING)  # Suppress Flask logs
        self.result: Optional[AuthorizationResult] = None
        self._server = None
        self._thread: Optional[threading.Thread] = None
        self._done = threading.Event()

        # Any path counts: the first request to reach the listener is the redirect
        self.app.add_url_rule(
            "/", "oauth_callback", self._handle_callback, defaults={"path": ""}, methods=["GET"]
        )
        self.app.add_url_rule(
            "/<path:path>", "oauth_callback_path", self._handle_callback, methods=["GET"]
        )

    def _handle_callback(self, path: str = "") -> Response:
        """Handle the OAuth redirect from Coinbase."""
        if self._done.is_set():
            return Response("Authorization already handled.", status=410, content_type="text/plain")

        logger.info("Received OAuth callback")

        error = request.args.get("error")
        if error:
            error_desc = request.args.get("error_description", "Unknown error")
            logger.error(f"OAuth error: {error} - {error_desc}")
            self.result = AuthorizationResult(
                success=False, error=error, error_description=error_desc
            )
            self._done.set()
            return Response(
                f"Authorization failed: {error}. You can close this window.",
                status=400,
                content_type="text/plain",
            )

        try:
            code, state = parse_callback_target(request.full_path, self.config.redirect_url)
        except CallbackParseError as e:
            logger.error(str(e))
            self.result = AuthorizationResult(
                success=False, error="invalid_callback", error_description=str(e)
            )
            self._done.set()
            return Response(
                "Authorization failed: malformed callback. You can close this window.",
                status=400,
                content_type="text/plain",
            )

        logger.info("Authorization code received")
        self.result = AuthorizationResult(success=True, authorization_code=code, state=state)
        self._done.set()

        return Response(SUCCESS_MESSAGE, status=200, content_type="text/plain")

    def _build_ssl_context(self) -> Optional[ssl.SSLContext]:
        """Create an SSL context when certificate paths are configured."""
        if not self.config.ssl_cert_path:
            return None

        cert_path = Path(self.config.ssl_cert_path)
        key_path = Path(self.config.ssl_key_path)

        if not cert_path.exists():
            raise FileNotFoundError(f"SSL certificate not found at {cert_path}")
        if not key_path.exists():
            raise FileNotFoundError(f"SSL key not found at {key_path}")

        ssl_context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        ssl_context.load_cert_chain(str(cert_path), str(key_path))
        logger.info(f"Using SSL certificate: {cert_path}")
        return ssl_context

    def start(self) -> None:
        """
        Bind the listener and start serving in a background thread.

        Raises:
            FileNotFoundError: If configured SSL files are missing
            OSError: If the port cannot be bound
        """
        host = self.config.callback_host
        port = self.config.callback_port

        self._server = make_server(
            host, port, self.app, threaded=False, ssl_context=self._build_ssl_context()
        )
        # handle_request() returns after this many idle seconds so the loop can see cancel()
        self._server.timeout = 0.2

        logger.info(f"OAuth callback listener bound to {host}:{port}")

        self._thread = threading.Thread(target=self._serve_once, daemon=True)
        self._thread.start()

    def _serve_once(self) -> None:
        while not self._done.is_set():
            self._server.handle_request()

    def wait_for_callback(self, timeout: float = 300) -> AuthorizationResult:
        """
        Wait for the OAuth callback.

        Args:
            timeout: Maximum seconds to wait (default: 300 = 5 minutes)

        Returns:
            AuthorizationResult with code and state, or an error
        """
        logger.info(f"Waiting for OAuth callback (timeout: {timeout}s)")

        if self._done.wait(timeout=timeout):
            if self.result is not None:
                return self.result
            return AuthorizationResult(
                success=False,
                error="cancelled",
                error_description="Authorization was cancelled before a callback arrived",
            )

        logger.warning(f"Timeout waiting for callback after {timeout}s")
        return AuthorizationResult(
            success=False,
            error="timeout",
            error_description=f"No callback received within {timeout} seconds. "
            f"Please ensure you completed the authorization in your browser.",
        )

    def cancel(self) -> None:
        """Abandon the wait; safe to call from another thread."""
        self._done.set()

    def stop(self) -> None:
        """Stop accepting connections and release the port."""
        self._done.set()
        if self._thread is not None:
            self._thread.join(timeout=2)
            self._thread = None
        if self._server is not None:
            self._server.server_close()
            self._server = None
            logger.info("OAuth callback listener closed")


def run_authorization_flow(
    config: OAuthConfig,
    authorization_url: str,
    open_browser: bool = False,
    timeout: Optional[float] = None,
    server: Optional[OAuthCallbackServer] = None,
) -> AuthorizationResult:
    """
    Run the interactive part of the OAuth flow.

    This function:
    1. Starts the callback listener
    2. Displays the authorization URL (and optionally opens a browser)
    3. Waits for the user to authorize
    4. Returns the authorization code and state, or an error

    Args:
        config: OAuth configuration
        authorization_url: Fully built authorization URL to visit
        open_browser: Whether to open the URL in a browser automatically
        timeout: Seconds to wait for callback (default: config.callback_timeout)
        server: Listener to use (creates one if not provided)

    Returns:
        AuthorizationResult with authorization code or error

    Raises:
        FileNotFoundError: If configured SSL files are missing
        OSError: If the callback port cannot be bound
    """
    server = server or OAuthCallbackServer(config)
    timeout = timeout if timeout is not None else config.callback_timeout

    try:
        server.start()

        print(f"\nOpen this URL in your browser:\n{authorization_url}\n\n")

        if open_browser:
            try:
                webbrowser.open(authorization_url)
            except webbrowser.Error as e:
                logger.warning(f"Could not open browser automatically: {e}")

        result = server.wait_for_callback(timeout)

        if result.success:
            logger.info("Authorization callback completed")
        else:
            logger.error(f"Authorization callback failed: {result.error} - {result.error_description}")

        return result

    finally:
        server.stop()
