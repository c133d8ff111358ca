from abi_export.main import main

raise SystemExit(main())
