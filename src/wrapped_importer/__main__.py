from wrapped_importer.main import main

main()
