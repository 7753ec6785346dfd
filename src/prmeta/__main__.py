"""prmetaのコマンドラインエントリポイント。"""

if __name__ == "__main__":
    from prmeta.cli import cli

    cli(prog_name="prmeta")
