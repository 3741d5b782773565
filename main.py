import argparse
import logging
import os
import random
import sys

from seatmix.errors import SeatingError
from seatmix.io_utils import (
    load_people, load_rooms, class_summary, save_arrangement_csv, save_placement_csv, placement_table
)
from seatmix.algorithms.scoring import SeatingParams
from seatmix.scheduling.orchestrator import generate_seating
from seatmix.scheduling.evaluation import summary
from seatmix.reports import export_seating_chart_pdf, export_placement_list_pdf
from seatmix.synthetic import generate_demo_school


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="SeatMix – Diverse Desk Seating Across Classrooms")
    # Input modes
    p.add_argument('--people', type=str, help='People CSV (first name,last name,class[,student id,school id,gender,language])')
    p.add_argument('--rooms', type=str, help='Rooms CSV (classroom name,seat capacity[,supervisor,supervisor 2])')
    p.add_argument('--demo', type=int, default=None, help='Generate a demo school with N students')
    p.add_argument('--demo_rooms', type=int, default=4)

    # Constraints
    p.add_argument('--segregate', action='store_true', help='Only seat people with the same gender code together')
    p.add_argument('--seed', type=int, default=None)
    p.add_argument('--strict', action='store_true', help='Exit with status 1 when conflicts remain unresolved')

    # Tuning
    p.add_argument('--acceptance_bar', type=int, default=8)
    p.add_argument('--window', type=int, default=30)
    p.add_argument('--full_attempts', type=int, default=3)
    p.add_argument('--repair_attempts', type=int, default=10)

    # Output
    p.add_argument('--out_chart', type=str, default='seating_chart.csv')
    p.add_argument('--out_list', type=str, default='placement_list.csv')
    p.add_argument('--pdf_dir', type=str, default=None, help='Also write seating chart and placement list PDFs here')
    p.add_argument('-v', '--verbose', action='store_true')
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.demo is not None:
        people, rooms = generate_demo_school(args.demo, args.demo_rooms,
                                             seed=args.seed if args.seed is not None else 42)
    elif args.people and args.rooms:
        try:
            people, duplicates = load_people(args.people)
            rooms = load_rooms(args.rooms)
        except ValueError as e:
            raise SystemExit(str(e))
        if duplicates:
            print(f"Found and ignored {duplicates} duplicate student entries.")
    else:
        raise SystemExit("Provide --people and --rooms, or --demo N")

    print("Classes: " + ", ".join(f"{k}={v}" for k, v in class_summary(people).items()))

    params = SeatingParams(
        acceptance_bar=args.acceptance_bar,
        window=args.window,
        max_full_attempts=args.full_attempts,
        max_repair_attempts=args.repair_attempts,
    )
    rng = random.Random(args.seed)

    def report(label, percent):
        print(f"[{percent:3d}%] {label}")

    try:
        result = generate_seating(people, rooms, segregate=args.segregate, params=params, rng=rng,
                                  progress=report)
    except SeatingError as e:
        raise SystemExit(e.message)

    print(summary(people, rooms, result.arrangement, segregate=args.segregate))
    if result.unresolved:
        print(f"Warning: {result.message}")

    save_arrangement_csv(args.out_chart, result.arrangement, rooms)
    save_placement_csv(args.out_list, result.arrangement, rooms)
    print(f"Saved: {args.out_chart}, {args.out_list}")

    if args.pdf_dir:
        os.makedirs(args.pdf_dir, exist_ok=True)
        chart_pdf = os.path.join(args.pdf_dir, "Seating_Chart.pdf")
        list_pdf = os.path.join(args.pdf_dir, "Placement_List.pdf")
        export_seating_chart_pdf(chart_pdf, result.arrangement, rooms)
        export_placement_list_pdf(list_pdf, placement_table(result.arrangement, rooms))
        print(f"Saved: {chart_pdf}, {list_pdf}")
    return 1 if args.strict and result.unresolved else 0


if __name__ == '__main__':
    sys.exit(main())
