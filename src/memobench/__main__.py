from memobench.cli import main

raise SystemExit(main())
