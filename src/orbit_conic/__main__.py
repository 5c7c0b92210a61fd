from orbit_conic.cli import main

raise SystemExit(main())
