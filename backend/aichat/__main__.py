from aichat.main import run

run()
