"""Allow running as `python -m pixel_world`."""

from pixel_world.app.cli import main

raise SystemExit(main())
