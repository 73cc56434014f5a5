from verse_tune.app.app import main

raise SystemExit(main())
