from charplot.cli import main

raise SystemExit(main())
