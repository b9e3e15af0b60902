from bvg_departures.cli import main

raise SystemExit(main())
