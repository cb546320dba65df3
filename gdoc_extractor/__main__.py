from gdoc_extractor.cli import app

app()
