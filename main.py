"""Development entrypoint for the conquest CPU demo."""

from __future__ import annotations

from conquest.main import main

if __name__ == "__main__":
    main()
