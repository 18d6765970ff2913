"""
Launcher for the remote UI client.

Connects to a remote UI server over WebSocket and mirrors its widget tree
until the connection closes.
"""

import argparse
import logging
from dataclasses import replace

from remote_ui.config import ClientConfig, configure_logging

logger = logging.getLogger(__name__)


def launch_client(config: ClientConfig, debug: bool = False) -> int:
    """
    Run one session against the server described by *config*.

    Parameters
    ----------
    config : ClientConfig
        Connection and protocol settings
    debug : bool
        Enable debug logging

    Returns
    -------
    int
        0 when the connection ended without a protocol failure, 1 otherwise
    """
    from remote_ui.session import shutdown_session, start_session
    from remote_ui.transport.websocket import WebSocketTransport

    debug = debug or config.debug_policy.enabled
    configure_logging(logging.DEBUG if debug else logging.INFO)

    logger.info(f"Launching remote UI client for {config.url}")
    transport = WebSocketTransport(config.url)
    session = start_session(
        transport,
        protocol_version=config.protocol_version,
        debug_policy=config.debug_policy,
    )
    try:
        transport.run()
    except KeyboardInterrupt:
        logger.info("Interrupted; closing connection")
    finally:
        shutdown_session()

    if session.close_kind is not None:
        logger.error("Session failed (%s): %s", session.close_kind.value, session.close_reason)
        return 1
    if transport.error is not None:
        return 1
    logger.info("Client closed")
    return 0


def main(argv=None):
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description='remote UI client'
    )

    parser.add_argument(
        '--host',
        default=None,
        help='Server hostname/IP (default: $REMOTE_UI_HOST or localhost)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=None,
        help='Server port (default: $REMOTE_UI_PORT or 9000)'
    )

    parser.add_argument(
        '--path',
        default=None,
        help='WebSocket path on the server (default: $REMOTE_UI_PATH or empty)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    config = ClientConfig.from_env()
    overrides = {
        key: value
        for key, value in (('host', args.host), ('port', args.port), ('path', args.path))
        if value is not None
    }
    if overrides:
        config = replace(config, **overrides)

    return launch_client(config, debug=args.debug)


if __name__ == '__main__':
    raise SystemExit(main())
