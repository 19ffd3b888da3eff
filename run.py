"""Project root entry point for launching the web API."""

from __future__ import annotations

import os


def main():
    from traveltalk.web import create_app

    app = create_app()
    port = int(os.environ.get("TRAVELTALK_PORT", "5500"))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("TRAVELTALK_DEBUG") == "1")


if __name__ == "__main__":
    main()
