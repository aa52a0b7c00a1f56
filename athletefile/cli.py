"""Interactive menu for managing a binary file of athlete records."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

from athletefile.binfile import Field, RecordFile, export_csv, import_csv
from athletefile.records import TEXT_FIELDS, Athlete, is_bin_name

_SEPARATOR = "-" * 68

_MENU = (
    "Bem-vindo ao sistema de gerenciamento de atletas!",
    "Escolha uma opção:",
    "1. Inserir atleta.",
    "2. Alterar atleta.",
    "3. Imprimir trecho.",
    "6. Transformar em csv.",
    "7. Ordenar.",
    "8. Busca.",
    "9. Sair.",
)

_FIELD_LABELS = {
    Field.MEASURE: "Measure",
    Field.QUANTILE: "Quantile",
    Field.AREA: "Area",
    Field.SEX: "Sex",
    Field.AGE: "Age",
    Field.GEOGRAPHY: "Geography",
    Field.ETHNIC: "Ethnic",
    Field.VALUE: "Value",
}

_INVALID_POSITION = "A posição que você digitou é inválida."


class _Session:
    """One run of the menu over a pair of text streams."""

    def __init__(self, input_stream: TextIO, output_stream: TextIO) -> None:
        self._input = input_stream
        self._output = output_stream
        self._return_to_menu = False
        self.bin_path: Optional[Path] = None

    # -- input and output ------------------------------------------------

    def say(self, text: str = "") -> None:
        self._output.write(text + "\n")

    def ask(self, prompt: str) -> str:
        self._output.write(prompt)
        self._output.flush()
        line = self._input.readline()
        if not line:
            raise EOFError("input ended")
        return line.rstrip("\r\n")

    def ask_int(self, prompt: str) -> int:
        return int(self.ask(prompt).strip())

    def ask_float(self, prompt: str) -> float:
        return float(self.ask(prompt).strip())

    @property
    def records(self) -> RecordFile:
        assert self.bin_path is not None
        return RecordFile(self.bin_path)

    # -- session ---------------------------------------------------------

    def run(self) -> int:
        csv_name = self.ask("Qual o nome do arquivo que deseja ler? ").strip()
        if not Path(csv_name).is_file():
            self.say("Erro, arquivo inexistente.")
            return 1
        try:
            self._import(csv_name)
        except ValueError as exc:
            self.say(f"Erro ao ler o arquivo CSV: {exc}")
            return 1

        handlers: dict[int, Callable[[], None]] = {
            1: self._insert,
            2: self._alter,
            3: self._print_range,
            6: self._export,
            7: self._sort,
            8: self._search,
        }
        while True:
            self.say()
            for line in _MENU:
                self.say(line)
            try:
                option = self.ask_int("Digite sua opção: ")
            except ValueError:
                option = -1
            if option == 9:
                self.say("Saindo...")
                return 0
            handler = handlers.get(option)
            if handler is None:
                self.say("Opção inválida.")
            else:
                try:
                    handler()
                except ValueError as exc:
                    self.say(f"Entrada inválida: {exc}")
            if not self._ask_return():
                return 0

    def _ask_return(self) -> bool:
        self.say(
            "Deseja retornar para o menu? Por favor responda com 'S' ou 's' "
            "para sim e 'N' ou 'n' para não."
        )
        answer = self.ask("").strip()
        if answer in ("S", "s"):
            self._return_to_menu = True
        elif answer in ("N", "n"):
            self._return_to_menu = False
        else:
            self.say("Por favor, digite uma resposta válida.")
        return self._return_to_menu

    def _import(self, csv_name: str) -> None:
        while True:
            name = self.ask(
                "Qual o nome do arquivo binário no qual deseja guardar os dados? "
            ).strip()
            if is_bin_name(name):
                break
            self.say(_SEPARATOR)
            self.say("Por favor, não se esqueça de adicionar o '.bin' no final do nome.")
        self.bin_path = Path(name)
        self.say("Aguarde enquanto os dados são lidos do arquivo CSV...")
        written = import_csv(csv_name, self.bin_path)
        self.say("Dados gravados em binario com sucesso.")
        self.say(f"Quantidade de dados gravados: {written}")
        self.say(
            "Você deseja verificar se a leitura foi correta com a criação de outro CSV?"
        )
        self.say("1. Sim")
        self.say("2. Não")
        try:
            choice = self.ask_int("")
        except ValueError:
            return
        if choice == 1:
            self._export()

    # -- menu actions ----------------------------------------------------

    def _export(self) -> None:
        name = self.ask("Digite o nome do arquivo no qual deseja gravar: ").strip()
        export_csv(self.bin_path, name + ".csv")
        self.say(
            "Conversão de binário para csv concluída, verifique abrindo o arquivo."
        )

    def _insert(self) -> None:
        total = self.records.count()
        self.say(f"Existem: {total} registros no arquivo.")
        position = self.ask_int(
            "Digite a posição na qual você deseja inserir um dado: "
        )
        if not 0 <= position <= total:
            self.say(_INVALID_POSITION)
            return
        self.say("Digite os dados que você quer inserir: ")
        texts = [
            self.ask(f"{_FIELD_LABELS[Field(name)]}: \n") for name, _ in TEXT_FIELDS
        ]
        value = self.ask_float("Value: \n")
        self.records.insert(position, Athlete(*texts, value=value))
        self.say(f"O atleta foi inserido na posição {position}.")

    def _alter(self) -> None:
        position = self.ask_int("Digite a posição na qual deseja alterar um dado: ")
        if not 0 <= position < self.records.count():
            self.say(_INVALID_POSITION)
            return
        fields = list(Field)
        self.say("O que você deseja alterar? ")
        for number, field in enumerate(fields, start=1):
            self.say(f"{number}. {_FIELD_LABELS[field]}.")
        self.say(f"{len(fields) + 1}. Esquece, decidi não mudar nada.")
        choice = self.ask_int("")
        if choice == len(fields) + 1:
            self.say("Nenhuma alteração feita.")
            return
        if not 1 <= choice <= len(fields):
            self.say("Opção inválida. ")
            return
        field = fields[choice - 1]
        raw = self.ask(f"Digite o novo '{_FIELD_LABELS[field]}' do atleta: \n")
        new_value = float(raw.strip()) if field is Field.VALUE else raw
        self.records.update(position, field, new_value)
        self.say("Registro atualizado com sucesso.")
        self.say("Você deseja ver como seu registro está atualmente?")
        self.say("1. Sim.")
        self.say("2. Não.")
        try:
            if self.ask_int("") == 1:
                self.say(str(self.records.read(position)))
        except ValueError:
            pass

    def _print_range(self) -> None:
        start = self.ask_int("Digite a posição inicial da impressão: ")
        end = self.ask_int("Digite a posição final da impressão: ")
        try:
            athletes = list(self.records.read_range(start, end))
        except IndexError:
            self.say("Intervalo inválido.")
            return
        for athlete in athletes:
            self.say(str(athlete))

    def _sort(self) -> None:
        assert self.bin_path is not None
        prefix = str(self.bin_path.parent / "temp")
        paths = self.records.split_and_sort(prefix=prefix)
        for path in paths:
            self.say(
                f"Arquivo {path} criado com {RecordFile(path).count()} "
                "registros ordenados."
            )
        self.say(f"Quantidade de arquivos criados: {len(paths)}")

    def _search(self) -> None:
        value = self.ask_float("Digite o 'value' que você deseja achar: ")
        try:
            position = self.records.binary_search(value)
        except ValueError:
            self.say("Você precisa ordenar primeiro antes de tentar fazer a busca.")
            return
        if position is None:
            self.say("Não encontrado! Esse 'value' não está presente no registro.")
            return
        self.say("O registro buscado é: ")
        self.say(str(self.records.read(position)))


def run(input_stream: Optional[TextIO] = None, output_stream: Optional[TextIO] = None) -> int:
    """Run the interactive menu; return the process exit status."""
    session = _Session(input_stream or sys.stdin, output_stream or sys.stdout)
    try:
        return session.run()
    except EOFError:
        return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="athletefile",
        description="Load athlete records from CSV and manage them in a binary file.",
    )
    parser.parse_args(argv)
    return run(sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())