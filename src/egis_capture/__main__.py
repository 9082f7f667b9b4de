from egis_capture.cli import main

raise SystemExit(main())
