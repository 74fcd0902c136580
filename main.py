"""Console front-end for the filesystem browser session.

Drives a BrowserSession from standard input and prints terminal lines as
they are appended. Configuration comes from the environment (a ``.env``
file is loaded first):

    FS_BROWSER_URL         Filesystem service URL (default: http://127.0.0.1:8080)
    FS_BROWSER_TIMEOUT     Request timeout in seconds (default: 30)
    FS_BROWSER_SCROLLBACK  Terminal capacity in lines (default: 100)
    FS_BROWSER_LOG_LEVEL   Logging level (default: WARNING)

To run:
    python main.py

Inside the console, ``:ls`` prints the current listing and ``exit`` or
Ctrl+D leaves.
"""

import asyncio
import logging
import os

from dotenv import load_dotenv

from client import DEFAULT_BASE_URL, AsyncFSClient, DirectoryListing
from models import DEFAULT_SCROLLBACK, BrowserSession, LineKind, TerminalLine

logger = logging.getLogger(__name__)

LINE_PREFIXES = {
    LineKind.SYSTEM: "* ",
    LineKind.INPUT: "",
    LineKind.OUTPUT: "",
    LineKind.ERROR: "! ",
}

EXIT_COMMANDS = {"exit", "quit"}


def print_line(line: TerminalLine) -> None:
    """Print one terminal line with a prefix for its kind."""
    print(f"{LINE_PREFIXES[line.kind]}{line.text}")


def print_listing(listing: DirectoryListing) -> None:
    """Print a directory listing, directories marked with a trailing slash."""
    print(f"-- {listing.path}")
    for entry in listing.items:
        suffix = "/" if entry.is_dir else ("@" if entry.is_symlink else "")
        details = "  ".join(str(value) for value in (entry.size, entry.owner) if value)
        print(f"   {entry.name}{suffix}  {details}".rstrip())


async def run(base_url: str, timeout: float, scrollback: int) -> None:
    """Run the interactive console until the user exits."""
    async with AsyncFSClient(base_url=base_url, timeout=timeout) as client:
        browser = BrowserSession(
            client,
            scrollback=scrollback,
            on_line=print_line,
            on_refresh=print_listing,
        )
        await browser.start()

        while True:
            try:
                line = await asyncio.to_thread(input, browser.prompt)
            except EOFError:
                break
            if line.strip() in EXIT_COMMANDS:
                break
            if line.strip() == ":ls":
                print_listing(DirectoryListing(path=browser.current_path, items=list(browser.entries)))
                continue
            browser.input_text = line
            await browser.submit()


def main() -> None:
    """Load configuration and start the console."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("FS_BROWSER_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    base_url = os.getenv("FS_BROWSER_URL", DEFAULT_BASE_URL)
    timeout = float(os.getenv("FS_BROWSER_TIMEOUT", "30"))
    scrollback = int(os.getenv("FS_BROWSER_SCROLLBACK", str(DEFAULT_SCROLLBACK)))

    logger.info(f"Connecting to {base_url}")
    try:
        asyncio.run(run(base_url, timeout, scrollback))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
