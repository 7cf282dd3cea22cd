from gamerepo.main import run

run()
