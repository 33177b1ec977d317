from expense_intake.main import main

main()
