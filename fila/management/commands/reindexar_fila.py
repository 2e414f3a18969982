# fila/management/commands/reindexar_fila.py
from django.core.management.base import BaseCommand

from barbearias.models import Barber
from fila import ledger


class Command(BaseCommand):
    help = "Regrava as posições da fila de cada barbeiro como 1..N (mantendo a ordem atual)."

    def add_arguments(self, parser):
        parser.add_argument("--barber", type=int, default=None,
                            help="ID do barbeiro (default: todos).")

    def handle(self, *args, **opts):
        qs = Barber.objects.all()
        if opts["barber"]:
            qs = qs.filter(pk=opts["barber"])

        total = 0
        for barber in qs:
            changed = ledger.reindex(barber.pk)
            if changed:
                self.stdout.write(f"{barber}: {changed} posição(ões) corrigida(s)")
            total += changed

        self.stdout.write(self.style.SUCCESS(f"Posições corrigidas: {total}"))
