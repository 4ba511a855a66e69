from innerbuilder.main import main

main()
