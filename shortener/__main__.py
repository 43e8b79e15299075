from shortener.cli import run

run()
