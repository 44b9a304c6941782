from seo_agent.cli import main

raise SystemExit(main())
