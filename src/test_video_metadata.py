#!/usr/bin/env python3
"""
Tests for the VideoRecord model and ffprobe-based probing.
"""

import json
import os
import sys
import tempfile
import unittest
from unittest.mock import patch

import ffmpeg

# Add the src directory to Python path for imports
sys.path.append(os.path.dirname(os.path.abspath(__file__)))
from errors import ProbeFailure, ProberUnavailableError
from video_metadata import VideoMetadataParser, VideoRecord


def probe_output(width=320, height=240, size="570000"):
    output = {
        'streams': [{'index': 0, 'codec_type': 'video', 'codec_name': 'h264',
                     'width': width, 'height': height}],
        'format': {'filename': 'sample.mp4'},
    }
    if size is not None:
        output['format']['size'] = size
    return output


class TestVideoRecord(unittest.TestCase):
    def test_derived_sizes(self):
        record = VideoRecord(path='a.mp4', width=1920, height=1080, size_in_bytes=3 * 1024 * 1024)
        self.assertEqual(record.size_in_megabytes, 3.0)
        self.assertEqual(record.size_in_gigabytes, 3 / 1024)

    def test_large_file_size(self):
        """Sizes beyond 4 GiB are kept exactly"""
        size = 6 * 1024 ** 3 + 1
        record = VideoRecord(path='big.mkv', width=3840, height=2160, size_in_bytes=size)
        self.assertEqual(record.size_in_bytes, size)
        self.assertGreater(record.size_in_gigabytes, 6)

    def test_negative_size_rejected(self):
        with self.assertRaises(ValueError):
            VideoRecord(path='a.mp4', width=1, height=1, size_in_bytes=-1)

    def test_resolution(self):
        record = VideoRecord(path='a.mp4', width=320, height=240, size_in_bytes=0)
        self.assertEqual(record.resolution, '320x240')

    def test_resolution_without_video_stream(self):
        record = VideoRecord(path='a.iso', width=None, height=None, size_in_bytes=0)
        self.assertEqual(record.resolution, 'x')

    def test_result_line_padding(self):
        record = VideoRecord(path='a.mp4', width=320, height=240, size_in_bytes=0)
        self.assertEqual(record.result_line(), '320x240     0.0Mb       a.mp4')

    def test_result_line_full_precision(self):
        """Megabytes are printed unrounded"""
        record = VideoRecord(path='a.mp4', width=320, height=240, size_in_bytes=570000)
        self.assertIn('0.5435943603515625Mb', record.result_line())

    def test_to_dict(self):
        record = VideoRecord(path='a.mp4', width=320, height=240, size_in_bytes=1048576)
        self.assertEqual(record.to_dict(), {
            'File': 'a.mp4',
            'Width': 320,
            'Height': 240,
            'SizeInBytes': 1048576,
            'SizeInMb': 1.0,
            'SizeInGb': 1 / 1024,
        })
        self.assertEqual(VideoRecord.from_dict(record.to_dict()), record)


class TestVideoMetadataParser(unittest.TestCase):
    @patch('video_metadata.ffmpeg.probe')
    def test_probe(self, mock_probe):
        mock_probe.return_value = probe_output()
        record = VideoMetadataParser.probe('Assets/sample.mp4', cmd='ffprobe')

        self.assertEqual(record, VideoRecord('Assets/sample.mp4', 320, 240, 570000))
        args, kwargs = mock_probe.call_args
        self.assertEqual(args[0], 'Assets/sample.mp4')
        self.assertEqual(kwargs['cmd'], 'ffprobe')

    @patch.dict(os.environ, {'VIDEO_RESOLUTION_FFPROBE': '/opt/ffmpeg/bin/ffprobe'})
    @patch('video_metadata.ffmpeg.probe')
    def test_probe_uses_configured_command(self, mock_probe):
        mock_probe.return_value = probe_output()
        VideoMetadataParser.probe('sample.mp4')
        self.assertEqual(mock_probe.call_args[1]['cmd'], '/opt/ffmpeg/bin/ffprobe')

    @patch('video_metadata.ffmpeg.probe')
    def test_probe_without_video_stream(self, mock_probe):
        mock_probe.return_value = {
            'streams': [{'codec_type': 'audio', 'codec_name': 'aac'}],
            'format': {'size': '1024'},
        }
        record = VideoMetadataParser.probe('audio.mkv')
        self.assertIsNone(record.width)
        self.assertIsNone(record.height)
        self.assertEqual(record.size_in_bytes, 1024)

    @patch('video_metadata.ffmpeg.probe')
    def test_probe_size_falls_back_to_file_size(self, mock_probe):
        mock_probe.return_value = probe_output(size=None)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'sample.mp4')
            with open(path, 'wb') as f:
                f.write(b'\x00' * 2048)
            record = VideoMetadataParser.probe(path)
        self.assertEqual(record.size_in_bytes, 2048)

    @patch('video_metadata.ffmpeg.probe')
    def test_probe_failure(self, mock_probe):
        mock_probe.side_effect = ffmpeg.Error('ffprobe', b'', b'corrupted.mp4: Invalid data found')
        with self.assertRaises(ProbeFailure) as ctx:
            VideoMetadataParser.probe('corrupted.mp4')
        self.assertEqual(ctx.exception.path, 'corrupted.mp4')
        self.assertIn('Invalid data found', ctx.exception.message)

    @patch('video_metadata.ffmpeg.probe')
    def test_malformed_output_is_probe_failure(self, mock_probe):
        mock_probe.return_value = {'streams': [{'codec_type': 'video', 'width': 'wide', 'height': 1}],
                                   'format': {'size': '10'}}
        with self.assertRaises(ProbeFailure):
            VideoMetadataParser.probe('odd.mp4')

    @patch('video_metadata.ffmpeg.probe')
    def test_non_json_output_is_probe_failure(self, mock_probe):
        mock_probe.side_effect = json.JSONDecodeError('Expecting value', 'not json', 0)
        with self.assertRaises(ProbeFailure) as ctx:
            VideoMetadataParser.probe('garbled.mp4')
        self.assertEqual(ctx.exception.path, 'garbled.mp4')

    @patch('video_metadata.ffmpeg.probe')
    def test_invalid_utf8_output_is_probe_failure(self, mock_probe):
        mock_probe.side_effect = UnicodeDecodeError('utf-8', b'\xff', 0, 1, 'invalid start byte')
        with self.assertRaises(ProbeFailure):
            VideoMetadataParser.probe('tagged.mkv')

    @patch('video_metadata.ffmpeg.probe')
    def test_ffprobe_not_executable(self, mock_probe):
        mock_probe.side_effect = OSError(8, 'Exec format error')
        with self.assertRaises(ProberUnavailableError):
            VideoMetadataParser.probe('sample.mp4')

    @patch('video_metadata.ffmpeg.probe')
    def test_ffprobe_missing(self, mock_probe):
        mock_probe.side_effect = FileNotFoundError(2, 'No such file or directory', 'ffprobe')
        with self.assertRaises(ProberUnavailableError):
            VideoMetadataParser.probe('sample.mp4')


if __name__ == '__main__':
    unittest.main()
