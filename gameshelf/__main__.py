from gameshelf.app import main

main()
