from explain_advisor.main import main

raise SystemExit(main())
