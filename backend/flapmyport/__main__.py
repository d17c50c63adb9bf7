from flapmyport.cli import main

main()
