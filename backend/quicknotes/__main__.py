from quicknotes.main import run

run()
