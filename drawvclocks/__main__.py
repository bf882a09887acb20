from drawvclocks.cli import main

main()
