from termbag import app

app(prog_name="termbag")
