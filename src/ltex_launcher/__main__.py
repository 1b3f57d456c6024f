from ltex_launcher.server import main

main()
