from errgen.compiler.cli import main

raise SystemExit(main())
