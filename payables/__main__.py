from payables.main import run

run()
