import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from variationhub import (  # noqa: E402
    CDSHaplotype,
    ProteinFunctionPredictionMatrix,
    ProteinHaplotype,
    ReferenceTranscript,
    TranscriptHaplotypeContainer,
)
from variationhub.haplotypes import sequence_hex, translate_cds  # noqa: E402

REFERENCE_CDS = "ATGCCCAAATAA"  # M P K *
MISSENSE_CDS = "ATGCTCAAATAA"  # M L K *
SYNONYMOUS_CDS = "ATGCCGAAATAA"  # M P K *
STOP_LOST_CDS = "ATGCCCAAACAA"  # M P K Q
DELETION_CDS = "ATGAAATAA"  # M K *


def _container() -> TranscriptHaplotypeContainer:
    transcript = ReferenceTranscript(
        stable_id="ENST00000000002",
        translation_id="ENSP00000000002",
        coding_sequence=REFERENCE_CDS,
        protein=translate_cds(REFERENCE_CDS),
    )
    sift = ProteinFunctionPredictionMatrix.from_records(
        "sift",
        [
            {"position": 2, "amino_acid": "L", "prediction": None, "score": 0.01},
            {"position": 3, "amino_acid": "R", "prediction": "tolerated", "score": 0.4},
        ],
    )
    polyphen = ProteinFunctionPredictionMatrix.from_records(
        "polyphen",
        [{"position": 2, "amino_acid": "L", "prediction": None, "score": 0.5}],
    )
    return TranscriptHaplotypeContainer(
        transcript,
        prediction_matrices={"sift": sift, "polyphen": polyphen},
    )


def test_translate_cds_ignores_partial_codon() -> None:
    assert translate_cds(REFERENCE_CDS) == "MPK*"
    assert translate_cds(REFERENCE_CDS + "AT") == "MPK*"


def test_add_cds_sequence_links_cds_and_protein_haplotypes() -> None:
    container = _container()

    cds = container.add_cds_sequence(MISSENSE_CDS)
    protein = cds.get_protein_haplotype()

    assert isinstance(cds, CDSHaplotype)
    assert isinstance(protein, ProteinHaplotype)
    assert protein.sequence == "MLK*"
    assert protein.hex == sequence_hex("MLK*")
    assert protein.get_all_cds_haplotypes() == [cds]
    assert container.get_haplotype_by_hex(cds.hex) is cds


def test_synonymous_cds_haplotypes_share_a_protein_haplotype() -> None:
    container = _container()

    reference = container.add_cds_sequence(REFERENCE_CDS)
    synonymous = container.add_cds_sequence(SYNONYMOUS_CDS)

    assert len(container.get_all_cds_haplotypes()) == 2
    assert len(container.get_all_protein_haplotypes()) == 1

    protein = container.get_all_protein_haplotypes()[0]
    assert protein.get_all_cds_haplotypes() == [reference, synonymous]
    assert protein.is_reference()
    assert protein.name == "ENSP00000000002:REF"
    assert synonymous.get_all_diffs() == [{"diff": "6C>G"}]


def test_missense_haplotype_is_annotated_from_container_matrices() -> None:
    container = _container()
    protein = container.add_cds_sequence(MISSENSE_CDS).get_protein_haplotype()

    diffs = protein.get_all_diffs()

    assert protein.name == "ENSP00000000002:2P>L"
    assert protein.indel is False
    assert [diff.to_dict() for diff in diffs] == [
        {
            "diff": "2P>L",
            "sift_prediction": "deleterious",
            "sift_score": 0.01,
            "polyphen_prediction": "possibly damaging",
            "polyphen_score": 0.5,
        }
    ]
    assert protein.get_all_flags() == ["deleterious_sift_or_polyphen"]


def test_stop_lost_haplotype_is_flagged() -> None:
    container = _container()
    protein = container.add_cds_sequence(STOP_LOST_CDS).get_protein_haplotype()

    assert [diff.diff for diff in protein.get_all_diffs()] == ["4*>Q"]
    assert protein.get_all_flags() == ["stop_change"]


def test_deletion_haplotype_is_an_indel() -> None:
    container = _container()
    cds = container.add_cds_sequence(DELETION_CDS)
    protein = cds.get_protein_haplotype()

    assert cds.indel is True
    assert protein.indel is True
    assert [diff.diff for diff in protein.get_all_diffs()] == ["2delP"]
    assert protein.get_all_flags() == ["indel"]


def test_repeated_sequences_increment_counts_and_frequency() -> None:
    container = _container()
    container.add_cds_sequence(REFERENCE_CDS)
    container.add_cds_sequence(REFERENCE_CDS)
    container.add_cds_sequence(MISSENSE_CDS)

    reference = container.get_haplotype_by_hex(sequence_hex("MPK*"))
    missense = container.get_haplotype_by_hex(sequence_hex("MLK*"))

    assert reference.count == 2
    assert missense.count == 1
    assert reference.frequency == pytest.approx(2 / 3)
    assert container.total_haplotype_count("cds") == 3


def test_cds_haplotype_json_includes_diffs() -> None:
    container = _container()
    cds = container.add_cds_sequence(MISSENSE_CDS)

    payload = cds.to_json_dict()

    assert payload["type"] == "cds"
    assert payload["diffs"] == [{"diff": "5C>T"}]
    assert cds.name == "ENST00000000002:5C>T"
    assert "_container" not in payload


def test_unknown_hex_raises_key_error() -> None:
    with pytest.raises(KeyError):
        _container().get_haplotype_by_hex("missing")


def test_unknown_prediction_tool_is_rejected() -> None:
    transcript = ReferenceTranscript(
        stable_id="ENST1",
        coding_sequence=REFERENCE_CDS,
        protein="MPK*",
    )
    matrix = ProteinFunctionPredictionMatrix.from_records("sift", [])

    with pytest.raises(ValueError):
        TranscriptHaplotypeContainer(transcript, prediction_matrices={"cadd": matrix})
