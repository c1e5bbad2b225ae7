from gha_workflows.cli import main

raise SystemExit(main())
