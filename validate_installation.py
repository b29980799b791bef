#!/usr/bin/env python3
"""
Validate HDC-EMG Installation

Run this script to verify that all components are properly installed
and working correctly.
"""

import sys
import traceback


def test_imports():
    """Test that all modules can be imported."""
    print("Testing imports...")

    try:
        from hdc_emg import (
            # Vectors
            BipolarHypervector,
            IntegerHypervector,
            RealHypervector,
            # Memory
            ItemMemory,
            ContinuousItemMemory,
            AssociativeMemory,
            # Models
            Encoder,
            Spatial,
            Temporal,
            # Training
            PrototypeTrainer,
        )
        print("  All imports successful!")
        return True
    except ImportError as e:
        print(f"  Import failed: {e}")
        traceback.print_exc()
        return False


def test_algebra():
    """Test bind/bundle/permute/distance on every representation."""
    print("\nTesting hypervector algebra...")

    try:
        from hdc_emg.vectors import VECTOR_TYPES, bind, bundle, distance, permute

        for representation, vector_type in VECTOR_TYPES.items():
            a = vector_type.random(10000)
            b = vector_type.random(10000)
            recovered = bind(bind(a, b), b)
            bundled = bundle([a, b])
            print(
                f"  {representation.value}: d(a, a)={distance(a, a):.3f} "
                f"d(a, b)={distance(a, b):.3f} "
                f"d(unbind, a)={distance(recovered, a):.3f} "
                f"d(bundle, a)={distance(bundled, a):.3f}"
            )
            assert distance(permute(a, 0), a) == 0.0
        print("  Hypervector algebra: OK")
        return True
    except Exception as e:
        print(f"  Hypervector algebra failed: {e}")
        traceback.print_exc()
        return False


def test_continuous_item_memory():
    """Test the ordered structure of the continuous item memory."""
    print("\nTesting Continuous Item Memory...")

    try:
        from hdc_emg import ContinuousItemMemory

        memory = ContinuousItemMemory(num_levels=10, dim=10000, seed=0)
        distances = [memory[0].distance(memory[level]) for level in range(10)]
        print("  Distance from level 0: " + " ".join(f"{d:.2f}" for d in distances))
        assert all(a < b for a, b in zip(distances, distances[1:]))
        print("  Continuous Item Memory: OK")
        return True
    except Exception as e:
        print(f"  Continuous Item Memory failed: {e}")
        traceback.print_exc()
        return False


def test_pipeline():
    """Train and evaluate on a synthetic two-class recording."""
    print("\nTesting train/predict pipeline...")

    try:
        import torch
        from hdc_emg import (
            ContinuousItemMemory,
            Encoder,
            ItemMemory,
            PrototypeTrainer,
            Spatial,
            predict_point,
        )

        labels = torch.tensor([1] * 50 + [2] * 50)
        dataset = ((labels == 2).to(torch.float64) * 12.0 + 3.0).unsqueeze(1).repeat(1, 4)
        dataset = dataset + torch.rand(100, 4, dtype=torch.float64)

        encoder = Encoder(
            ItemMemory(num_items=4, dim=4000, seed=0),
            ContinuousItemMemory(num_levels=4, dim=4000, seed=1),
        )
        trainer = PrototypeTrainer(encoder)
        memory = trainer.train(dataset, labels, Spatial())
        accuracy = predict_point(dataset, labels, encoder, memory, Spatial(), trainer.label_offset)

        print(f"  Prototypes: {len(memory)}")
        print(f"  Exemplars per label: {trainer.exemplar_counts}")
        print(f"  Accuracy: {accuracy:.1f}%")
        print("  Pipeline: OK")
        return True
    except Exception as e:
        print(f"  Pipeline failed: {e}")
        traceback.print_exc()
        return False


def main():
    """Run all validation tests."""
    print("=" * 60)
    print("HDC-EMG Installation Validation")
    print("=" * 60)

    tests = [
        ("Imports", test_imports),
        ("Hypervector Algebra", test_algebra),
        ("Continuous Item Memory", test_continuous_item_memory),
        ("Train/Predict Pipeline", test_pipeline),
    ]

    results = []
    for name, test_fn in tests:
        try:
            result = test_fn()
            results.append((name, result))
        except Exception as e:
            print(f"\n{name} crashed: {e}")
            results.append((name, False))

    # Summary
    print("\n" + "=" * 60)
    print("Validation Summary")
    print("=" * 60)

    passed = sum(1 for _, r in results if r)
    total = len(results)

    for name, result in results:
        status = "PASS" if result else "FAIL"
        print(f"  {name}: {status}")

    print(f"\n{passed}/{total} tests passed")

    if passed == total:
        print("\nAll tests passed! Installation is valid.")
        return 0
    else:
        print("\nSome tests failed. Please check the errors above.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
