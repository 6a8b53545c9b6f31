from email_threat_scorer.cli import main

raise SystemExit(main())
