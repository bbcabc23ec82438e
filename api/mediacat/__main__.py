from mediacat.server import main

main()
