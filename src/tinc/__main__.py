from tinc.main import app

app()
