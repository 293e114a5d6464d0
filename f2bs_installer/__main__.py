from f2bs_installer.cli import main

raise SystemExit(main())
