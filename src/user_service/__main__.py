from src.user_service.cli import main

main()
