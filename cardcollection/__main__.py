from cardcollection.main import run

run()
