from codegraph_leakscan.cli import main

main()
