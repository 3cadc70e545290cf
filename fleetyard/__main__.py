from fleetyard.main import main

raise SystemExit(main())
