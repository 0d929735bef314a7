from xgbridge.cli import main

main()
