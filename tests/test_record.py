import os
import unittest
import warnings

from mesh_init.record import (
    DATA_WIDTH,
    RECORD_LAYOUT,
    Field,
    NodeRecord,
    bit_array,
    decode_record,
    encode_record,
    field_bits,
    pack_fields,
    record_bits,
    unpack_fields,
)


class TestBitArray(unittest.TestCase):
    def test_msb_first_zero_padded(self):
        self.assertEqual(bit_array(7, 4), "0111")
        self.assertEqual(bit_array(10, 14), "00000000001010")
        self.assertEqual(bit_array(16379, 14), "11111111111011")
        self.assertEqual(bit_array(0, 10), "0" * 10)

    def test_exact_width_reparses(self):
        for w in (1, 4, 10, 14):
            for v in (0, 1, (1 << w) - 1, (1 << w) // 3):
                s = bit_array(v, w)
                self.assertEqual(len(s), w)
                self.assertEqual(int(s, 2), v)

    def test_high_bits_are_discarded(self):
        self.assertEqual(bit_array(18, 4), "0010")
        self.assertEqual(bit_array(1030, 10), "0000000110")
        self.assertEqual(field_bits(1 << 10, 10), 0)

    def test_negative_wraps_twos_complement(self):
        self.assertEqual(bit_array(-1, 4), "1111")
        self.assertEqual(bit_array(-3, 4), "1101")

    def test_zero_width(self):
        self.assertEqual(bit_array(5, 0), "")
        self.assertEqual(field_bits(5, 0), 0)


class TestRecordPacking(unittest.TestCase):
    def test_layout_widths(self):
        self.assertEqual(sum(f.width for f in RECORD_LAYOUT), DATA_WIDTH)
        self.assertEqual(
            [f.name for f in RECORD_LAYOUT],
            ["ex", "wv", "cf_9", "cf_7", "cf_5", "cf_3", "cf_2", "cf_1"],
        )

    def test_field_order_in_literal(self):
        rec = NodeRecord(ex=16379, cf_9=7, cf_2=5, cf_1=7)
        expected = (
            "11111111111011"  # ex
            + "0" * 10        # wv
            + "0111"          # cf_9
            + "0" * 30        # cf_7, cf_5, cf_3
            + "0000000101"    # cf_2
            + "0111"          # cf_1
        )
        self.assertEqual(record_bits(rec), expected)

    def test_literal_matches_per_field_bits(self):
        rec = NodeRecord(ex=10, wv=3, cf_9=1, cf_7=2, cf_5=4, cf_3=8, cf_2=1000, cf_1=15)
        concat = "".join(bit_array(getattr(rec, f.name), f.width) for f in RECORD_LAYOUT)
        self.assertEqual(record_bits(rec), concat)

    def test_decode_inverts_encode(self):
        rec = NodeRecord(ex=16379, wv=512, cf_9=7, cf_7=1, cf_5=2, cf_3=3, cf_2=1023, cf_1=7)
        self.assertEqual(decode_record(encode_record(rec)), rec)

    def test_pack_generic_layout(self):
        layout = [Field("a", 3), Field("b", 5)]
        word = pack_fields({"a": 5, "b": 1}, layout)
        self.assertEqual(int(word), (5 << 5) | 1)
        self.assertEqual(unpack_fields(int(word), layout), {"a": 5, "b": 1})

    def test_missing_fields_pack_as_zero(self):
        self.assertEqual(int(pack_fields({}, RECORD_LAYOUT)), 0)

    def test_oversized_field_warns_and_truncates(self):
        rec = NodeRecord(cf_2=1030)
        with self.assertWarns(UserWarning):
            bits = record_bits(rec)
        self.assertEqual(bits[-14:-4], "0000000110")

    def test_truncation_warning_points_at_caller(self):
        here = os.path.basename(__file__)
        with self.assertWarns(UserWarning) as cm:
            record_bits(NodeRecord(cf_2=2000))
        self.assertEqual(os.path.basename(cm.filename), here)
        with self.assertWarns(UserWarning) as cm:
            encode_record(NodeRecord(ex=1 << 14))
        self.assertEqual(os.path.basename(cm.filename), here)
        with self.assertWarns(UserWarning) as cm:
            pack_fields({"cf_1": 16})
        self.assertEqual(os.path.basename(cm.filename), here)

    def test_fitting_fields_do_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            record_bits(NodeRecord(ex=16383, cf_2=1023, cf_1=15))


if __name__ == "__main__":
    unittest.main()
