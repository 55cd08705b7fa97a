from receipt_processor.cli import main

raise SystemExit(main())
