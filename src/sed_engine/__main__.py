from sed_engine.adapters.cli.app import main

raise SystemExit(main())
