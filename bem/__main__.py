from bem.cli import main

main(prog_name="bem")
