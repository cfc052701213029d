from booklist.cli import main

main()
