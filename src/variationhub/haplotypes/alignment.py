"""Raw difference tokens between a reference sequence and a haplotype."""

from __future__ import annotations

from Bio.Align import PairwiseAligner


def _build_aligner() -> PairwiseAligner:
    aligner = PairwiseAligner()
    aligner.mode = "global"
    aligner.match_score = 1.0
    aligner.mismatch_score = -1.0
    aligner.open_gap_score = -2.0
    aligner.extend_gap_score = -0.5
    return aligner


_ALIGNER = _build_aligner()


def diff_sequences(reference: str, alternate: str) -> list[str]:
    """Return diff tokens describing how ``alternate`` departs from ``reference``.

    Tokens use 1-based reference coordinates and come out in reference order:

    * ``19P>L``: substitution of P by L at position 19
    * ``20delAG``: deletion of reference residues 20-21
    * ``20insK``: K inserted after reference position 20 (0 means before the
      first residue)

    Sequences of equal length are compared position by position and only ever
    yield substitutions. Otherwise the pair is globally aligned.
    """

    if len(reference) == len(alternate):
        return _substitutions(reference, alternate, 0, 0, len(reference))

    if not reference:
        return [f"0ins{alternate}"]
    if not alternate:
        return [f"1del{reference}"]

    alignment = _ALIGNER.align(reference, alternate)[0]
    ref_coords, alt_coords = (list(map(int, row)) for row in alignment.coordinates)

    diffs: list[str] = []
    for step in range(len(ref_coords) - 1):
        ref_start, ref_end = ref_coords[step], ref_coords[step + 1]
        alt_start, alt_end = alt_coords[step], alt_coords[step + 1]

        if ref_start == ref_end:
            diffs.append(f"{ref_start}ins{alternate[alt_start:alt_end]}")
        elif alt_start == alt_end:
            diffs.append(f"{ref_start + 1}del{reference[ref_start:ref_end]}")
        else:
            diffs.extend(
                _substitutions(reference, alternate, ref_start, alt_start, ref_end - ref_start)
            )

    return diffs


def _substitutions(
    reference: str,
    alternate: str,
    ref_start: int,
    alt_start: int,
    length: int,
) -> list[str]:
    diffs = []
    for offset in range(length):
        ref_residue = reference[ref_start + offset]
        alt_residue = alternate[alt_start + offset]
        if ref_residue != alt_residue:
            diffs.append(f"{ref_start + offset + 1}{ref_residue}>{alt_residue}")
    return diffs
