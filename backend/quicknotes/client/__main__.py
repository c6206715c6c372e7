from quicknotes.client.web import run

run()
