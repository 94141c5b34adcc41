"""Terminal preview of the storefront countdown widget.

Polls the timer API once for ``(shop, product)`` and prints the countdown
every tick until it reaches zero or Ctrl-C is pressed.

    python -m countdown_timers.presentation.storefront.countdown_preview demo.myshopify.com 8123456789
"""

import argparse
import asyncio
import json
import sys
from typing import Any, TextIO

from countdown_timers.application.services import CountdownWidget
from countdown_timers.application.services.countdown_display import Renderer
from countdown_timers.config import Settings, get_settings
from countdown_timers.domain.entities import CountdownFrame
from countdown_timers.infrastructure.logging.log_config import setup_logging
from countdown_timers.infrastructure.storefront import StorefrontTimerClient


def build_widget(
    settings: Settings,
    shop: str,
    product_id: str,
    renderer: Renderer,
    block_settings: dict[str, Any] | None = None,
) -> CountdownWidget:
    source = StorefrontTimerClient(
        base_url=settings.storefront_api_base_url,
        timeout=settings.storefront_poll_timeout,
    )
    return CountdownWidget(
        source,
        shop,
        product_id,
        renderer,
        block_settings=block_settings,
        tick_interval=settings.countdown_tick_seconds,
    )


class TerminalRenderer:
    """Prints one line per frame; urgent frames are flagged."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream
        self.done = asyncio.Event()

    def __call__(self, frame: CountdownFrame | None) -> None:
        if frame is None:
            return
        marker = "  [URGENT]" if frame.urgent else ""
        stream = self._stream if self._stream is not None else sys.stdout
        print(f"{frame.title}: {frame.text}{marker}", file=stream, flush=True)
        if frame.finished:
            self.done.set()


async def main() -> None:
    parser = argparse.ArgumentParser(description="Preview a storefront countdown in the terminal")
    parser.add_argument("shop", help="Store domain, e.g. demo.myshopify.com")
    parser.add_argument("product_id", help="Product ID")
    parser.add_argument("--base-url", help="Timer API base URL (overrides STOREFRONT_API_BASE_URL)")
    parser.add_argument(
        "--block-settings",
        default="{}",
        help='Local display overrides as JSON, e.g. \'{"title": "Sale ends"}\'',
    )
    args = parser.parse_args()

    settings = get_settings()
    if args.base_url:
        settings = settings.model_copy(update={"storefront_api_base_url": args.base_url})
    setup_logging(settings)

    try:
        block_settings = json.loads(args.block_settings)
    except json.JSONDecodeError:
        block_settings = {}
    if not isinstance(block_settings, dict):
        block_settings = {}

    renderer = TerminalRenderer()
    widget = build_widget(settings, args.shop, args.product_id, renderer, block_settings)
    await widget.mount()
    try:
        if await widget.wait_loaded() is None:
            print(f"No active timer for {args.shop} product {args.product_id}")
            return
        await renderer.done.wait()
    finally:
        await widget.unmount()


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
